"""Draws the world into a fixed virtual resolution and scales it onto the screen."""

from __future__ import annotations

from ..components import (
    PixelPerfectCameraComponent,
    RectangleComponent,
    Registry,
    SpriteComponent,
    TextComponent,
    TextComponentPixelPerfect,
    TextComponentPro,
    TransformComponent,
)
from ..config import UI_DEFAULT_FONT_SIZE, VIRTUAL_HEIGHT, VIRTUAL_WIDTH
from ..log import DEBUG_BUILD
from ..primitives import (
    DARKBLUE,
    DARKGREEN,
    RAYWHITE,
    WHITE,
    Camera2D,
    Rectangle,
    Vector2,
)
from ..renderer import Renderer, get_renderer

VIRTUAL_ASPECT = VIRTUAL_WIDTH / VIRTUAL_HEIGHT


def viewport(screen_width: int, screen_height: int) -> tuple[int, int, int, int]:
    """Return (x, y, width, height) of the largest letterboxed area with the virtual aspect."""
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"screen size must be positive, got {screen_width}x{screen_height}")
    if screen_width / screen_height > VIRTUAL_ASPECT:
        height = screen_height
        width = int(height * VIRTUAL_ASPECT)
        return (screen_width - width) // 2, 0, width, height
    width = screen_width
    height = int(width / VIRTUAL_ASPECT)
    return 0, (screen_height - height) // 2, width, height


def _to_view(camera: Camera2D, x: float, y: float) -> Vector2:
    return Vector2((x - camera.target.x) * camera.zoom + camera.offset.x,
                   (y - camera.target.y) * camera.zoom + camera.offset.y)


def _view_rect(camera: Camera2D, rect: Rectangle) -> Rectangle:
    corner = _to_view(camera, rect.x, rect.y)
    return Rectangle(corner.x, corner.y, rect.width * camera.zoom, rect.height * camera.zoom)


def _draw_world(registry: Registry, renderer: Renderer, camera: Camera2D) -> None:
    for _, transform, rect in registry.view(TransformComponent, RectangleComponent):
        renderer.draw_rectangle_pro(_view_rect(camera, rect.rectangle), Vector2(0.0, 0.0),
                                    transform.rotation, rect.color)

    for _, transform, sprite in registry.view(TransformComponent, SpriteComponent):
        if sprite.texture is None:
            continue
        width, height = sprite.texture.get_size()
        source = Rectangle(0.0, 0.0, float(width), float(height))
        dest = _view_rect(camera, Rectangle(transform.position.x, transform.position.y,
                                            sprite.size.x, sprite.size.y))
        origin = Vector2(dest.width / 2, dest.height / 2)
        renderer.draw_texture_pro(sprite.texture, source, dest, origin,
                                  transform.rotation, sprite.tint)

    for _, transform, text in registry.view(TransformComponent, TextComponent):
        position = _to_view(camera, transform.position.x, transform.position.y)
        renderer.draw_text(str(text.text), int(position.x), int(position.y),
                           text.font_size, text.color)

    for _, transform, text in registry.view(TransformComponent, TextComponentPro):
        position = _to_view(camera, transform.position.x, transform.position.y)
        renderer.draw_text_pro(text.font, str(text.text), position, Vector2(0.0, 0.0),
                               transform.rotation, text.font_size, text.spacing, text.tint)

    for _, transform, text in registry.view(TransformComponent, TextComponentPixelPerfect):
        position = _to_view(camera, transform.position.x, transform.position.y)
        renderer.draw_text_pixel_perfect(text.font, str(text.text), position,
                                         text.font_size, text.spacing, text.tint)


def draw_pixel_perfect(registry: Registry) -> None:
    """Render the scene through its pixel-perfect camera; does nothing without one."""
    found = next(registry.view(PixelPerfectCameraComponent), None)
    if found is None:
        return
    camera = found[1]

    renderer = get_renderer()
    screen_width, screen_height = renderer.screen_size()
    x, y, width, height = viewport(screen_width, screen_height)
    camera.dest_rec = Rectangle(float(x), float(y), float(width), float(height))

    with renderer.target(camera.target) as canvas:
        canvas.fill(tuple(RAYWHITE))
        _draw_world(registry, renderer, camera.world_space_camera)

    # The offscreen surface is stored upright, so the source area is never flipped here.
    source = camera.source_rec
    upright = Rectangle(source.x, source.y, abs(source.width), abs(source.height))
    renderer.draw_texture_pro(camera.target, upright,
                              _view_rect(camera.screen_space_camera, camera.dest_rec),
                              Vector2(0.0, 0.0), 0.0, WHITE)

    if DEBUG_BUILD:
        renderer.draw_text(f"Screen resolution: {screen_width}x{screen_height}",
                           10, 10, UI_DEFAULT_FONT_SIZE, DARKBLUE)
        renderer.draw_text(f"World resolution: {VIRTUAL_WIDTH}x{VIRTUAL_HEIGHT}",
                           10, 40, UI_DEFAULT_FONT_SIZE, DARKGREEN)
        renderer.draw_text(f"Viewport: {width}x{height}",
                           10, 70, UI_DEFAULT_FONT_SIZE, DARKGREEN)
        renderer.draw_fps(screen_width - 95, 10)