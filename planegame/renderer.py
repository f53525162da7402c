"""Immediate and batched 2D drawing onto a pygame surface."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Union

import pygame

from .log import LogLevel, engine_log
from .primitives import BLUE, LIME, ORANGE, RED, WHITE, Color, Rectangle, Vector2

FPS_FONT_SIZE = 20


@dataclass(frozen=True)
class TextureCommand:
    texture: pygame.Surface
    x: int
    y: int
    color: Color


@dataclass(frozen=True)
class TextCommand:
    text: str
    x: int
    y: int
    font_size: int
    color: Color


@dataclass(frozen=True)
class RectangleCommand:
    rec: Rectangle
    origin: Vector2
    rotation: float
    color: Color


@dataclass(frozen=True)
class TextureProCommand:
    texture: pygame.Surface
    source: Rectangle
    dest: Rectangle
    origin: Vector2
    rotation: float
    tint: Color


@dataclass(frozen=True)
class TextureRecCommand:
    texture: pygame.Surface
    source: Rectangle
    position: Vector2
    tint: Color


DrawCommand = Union[
    TextureCommand, TextCommand, RectangleCommand, TextureProCommand, TextureRecCommand
]


def _tinted(image: pygame.Surface, color: Color) -> pygame.Surface:
    if color == WHITE:
        return image
    tinted = pygame.Surface(image.get_size(), pygame.SRCALPHA)
    tinted.blit(image, (0, 0))
    tinted.fill(tuple(color), special_flags=pygame.BLEND_RGBA_MULT)
    return tinted


def _blit_rotated(target: pygame.Surface, image: pygame.Surface, x: float, y: float,
                  origin: Vector2, rotation: float) -> None:
    """Blit so that ``origin`` of the image lands on (x, y), rotated clockwise about it."""
    if rotation % 360 == 0:
        target.blit(image, (math.floor(x - origin.x), math.floor(y - origin.y)))
        return
    rotated = pygame.transform.rotate(image, -rotation)
    center = pygame.math.Vector2(
        image.get_width() / 2 - origin.x, image.get_height() / 2 - origin.y
    ).rotate(rotation)
    target.blit(rotated, rotated.get_rect(center=(x + center.x, y + center.y)))


def _render_text(font: pygame.font.Font, text: str, font_size: float,
                 spacing: float) -> pygame.Surface | None:
    """Render white text scaled to ``font_size`` with extra spacing between glyphs."""
    if not text:
        return None
    base = max(font.get_height(), 1)
    scale = font_size / base
    height = max(1, round(base * scale))
    glyphs = []
    for char in text:
        glyph = font.render(char, True, (255, 255, 255))
        width = max(1, round(glyph.get_width() * scale))
        glyphs.append(pygame.transform.scale(glyph, (width, height)))
    total = sum(g.get_width() for g in glyphs) + spacing * (len(glyphs) - 1)
    image = pygame.Surface((max(1, math.ceil(total)), height), pygame.SRCALPHA)
    x = 0.0
    for glyph in glyphs:
        image.blit(glyph, (round(x), 0))
        x += glyph.get_width() + spacing
    return image


class Renderer:
    """Draws onto a target surface, either at once or queued while batching."""

    def __init__(self, surface: pygame.Surface | None = None) -> None:
        self.surface = surface
        self.background_color: Color = BLUE
        self._commands: list[DrawCommand] = []
        self._batching = False
        self._clock = pygame.time.Clock()
        self._default_fonts: dict[int, pygame.font.Font] = {}

    @property
    def batching(self) -> bool:
        return self._batching

    @property
    def commands(self) -> tuple[DrawCommand, ...]:
        """The draw commands queued since the batch began."""
        return tuple(self._commands)

    @property
    def fps(self) -> int:
        return round(self._clock.get_fps())

    def _target(self) -> pygame.Surface:
        if self.surface is None:
            raise RuntimeError("renderer has no target surface")
        return self.surface

    def _default_font(self, size: int) -> pygame.font.Font:
        size = max(1, int(size))
        if size not in self._default_fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._default_fonts[size] = pygame.font.Font(None, size)
        return self._default_fonts[size]

    def _default_text(self, text: str, font_size: int) -> pygame.Surface | None:
        return _render_text(self._default_font(font_size), text, font_size, font_size / 10)

    def initialize(self) -> None:
        self._commands.clear()

    def shutdown(self) -> None:
        self._commands.clear()

    def begin_batch(self) -> None:
        """Start queuing draw commands instead of drawing them."""
        if self._batching:
            engine_log(LogLevel.WARNING, "BeginBatch called while already batching")
            return
        self._batching = True
        self._commands.clear()

    def end_batch(self) -> None:
        """Draw the queued commands and stop batching."""
        if not self._batching:
            engine_log(LogLevel.WARNING, "EndBatch called while not batching")
            return
        self.flush_batch()
        self._batching = False

    def flush_batch(self) -> None:
        """Draw and drop the queued commands, in the order they were queued."""
        if not self._batching or not self._commands:
            return
        commands, self._commands = self._commands, []
        for command in commands:
            self._execute(command)

    def _submit(self, command: DrawCommand) -> None:
        if self._batching:
            self._commands.append(command)
        else:
            self._execute(command)

    def _execute(self, command: DrawCommand) -> None:
        target = self._target()
        match command:
            case TextureCommand(texture, x, y, color):
                target.blit(_tinted(texture, color), (x, y))
            case TextCommand(text, x, y, font_size, color):
                image = self._default_text(text, font_size)
                if image is not None:
                    target.blit(_tinted(image, color), (x, y))
            case RectangleCommand(rec, origin, rotation, color):
                width, height = int(rec.width), int(rec.height)
                if width > 0 and height > 0:
                    image = pygame.Surface((width, height), pygame.SRCALPHA)
                    image.fill(tuple(color))
                    _blit_rotated(target, image, rec.x, rec.y, origin, rotation)
            case TextureProCommand(texture, source, dest, origin, rotation, tint):
                self._draw_texture_area(target, texture, source, dest, origin, rotation, tint)
            case TextureRecCommand(texture, source, position, tint):
                dest = Rectangle(position.x, position.y, abs(source.width), abs(source.height))
                self._draw_texture_area(target, texture, source, dest, Vector2(), 0.0, tint)

    @staticmethod
    def _draw_texture_area(target: pygame.Surface, texture: pygame.Surface,
                           source: Rectangle, dest: Rectangle, origin: Vector2,
                           rotation: float, tint: Color) -> None:
        area = pygame.Rect(int(source.x), int(source.y),
                           int(abs(source.width)), int(abs(source.height)))
        area = area.clip(texture.get_rect())
        width, height = int(abs(dest.width)), int(abs(dest.height))
        if area.width == 0 or area.height == 0 or width == 0 or height == 0:
            return
        image = texture.subsurface(area)
        flip_x, flip_y = source.width < 0, source.height < 0
        if flip_x or flip_y:
            image = pygame.transform.flip(image, flip_x, flip_y)
        if image.get_size() != (width, height):
            image = pygame.transform.scale(image, (width, height))
        _blit_rotated(target, _tinted(image, tint), dest.x, dest.y, origin, rotation)

    def begin_draw(self) -> pygame.Surface:
        """Start a frame; returns the surface being drawn on."""
        return self._target()

    def clear(self) -> None:
        self._target().fill(tuple(self.background_color))

    def end_draw(self) -> None:
        """Finish a frame: flush any batch and present the display surface."""
        if self._batching:
            self.flush_batch()
        if pygame.display.get_init() and self.surface is pygame.display.get_surface():
            pygame.display.flip()
        self._clock.tick()

    @contextmanager
    def target(self, surface: pygame.Surface) -> Iterator[pygame.Surface]:
        """Draw onto another surface for the duration of the block."""
        previous, self.surface = self.surface, surface
        try:
            yield surface
        finally:
            self.surface = previous

    def draw_texture(self, texture: pygame.Surface, x: int, y: int, color: Color) -> None:
        self._submit(TextureCommand(texture, x, y, color))

    def draw_texture_v(self, texture: pygame.Surface, position: Vector2, color: Color) -> None:
        self.draw_texture(texture, int(position.x), int(position.y), color)

    def draw_text(self, text: str, x: int, y: int, font_size: int, color: Color) -> None:
        """Draw text in the built-in font."""
        self._submit(TextCommand(text, x, y, font_size, color))

    def draw_text_pro(self, font: pygame.font.Font, text: str, position: Vector2,
                      origin: Vector2, rotation: float, font_size: float, spacing: float,
                      tint: Color) -> None:
        """Draw text in a font, rotated about ``origin``; never batched."""
        image = _render_text(font, text, font_size, spacing)
        if image is not None:
            _blit_rotated(self._target(), _tinted(image, tint), position.x, position.y,
                          origin, rotation)

    def draw_text_pixel_perfect(self, font: pygame.font.Font, text: str, position: Vector2,
                                font_size: float, spacing: float, tint: Color) -> None:
        """Draw text snapped to whole pixels, with whole-pixel spacing."""
        image = _render_text(font, text, font_size, round(spacing))
        if image is not None:
            self._target().blit(_tinted(image, tint), (round(position.x), round(position.y)))

    def measure_text(self, text: str, font_size: int) -> int:
        """Width in pixels of text drawn by draw_text."""
        image = self._default_text(text, font_size)
        return 0 if image is None else image.get_width()

    def screen_size(self) -> tuple[int, int]:
        return self._target().get_size()

    def draw_fps(self, x: int, y: int) -> None:
        fps = self.fps
        color = LIME
        if fps < 15:
            color = RED
        elif fps < 30:
            color = ORANGE
        self._execute(TextCommand(f"{fps} FPS", x, y, FPS_FONT_SIZE, color))

    def draw_rectangle_pro(self, rec: Rectangle, origin: Vector2, rotation: float,
                           color: Color) -> None:
        self._submit(RectangleCommand(rec, origin, rotation, color))

    def draw_texture_pro(self, texture: pygame.Surface, source: Rectangle, dest: Rectangle,
                         origin: Vector2, rotation: float, tint: Color) -> None:
        """Draw part of a texture scaled into ``dest``; negative source sizes flip it."""
        self._submit(TextureProCommand(texture, source, dest, origin, rotation, tint))

    def draw_texture_rec(self, texture: pygame.Surface, source: Rectangle,
                         position: Vector2, tint: Color) -> None:
        self._submit(TextureRecCommand(texture, source, position, tint))


_renderer: Renderer | None = None


def get_renderer() -> Renderer:
    """Return the shared renderer."""
    global _renderer
    if _renderer is None:
        _renderer = Renderer()
    return _renderer