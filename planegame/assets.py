"""Textures and fonts loaded per scene and released together when the scene ends."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

import pygame

from .primitives import Rectangle, Vector2Int

DEFAULT_ROOT = "assets"
# Size a font is rasterised at when no size is given.
DEFAULT_FONT_SIZE = 32
# Size a font with an explicit glyph set is rasterised at when no size is given.
CODEPOINT_FONT_SIZE = 10


class TextureType(Enum):
    SINGLE = "single"
    ANIMATED = "animated"
    TILED = "tiled"


@dataclass
class TextureData:
    """A loaded texture and, for sprite sheets and tile sets, its cell rectangles."""

    texture: pygame.Surface
    type: TextureType = TextureType.SINGLE
    grid_size: Vector2Int = Vector2Int(0, 0)
    frame_positions: list[Rectangle] = field(default_factory=list)
    tile_positions: list[list[Rectangle]] = field(default_factory=list)

    @property
    def full_rect(self) -> Rectangle:
        """The rectangle covering the whole texture."""
        width, height = self.texture.get_size()
        return Rectangle(0.0, 0.0, float(width), float(height))


def asset_path(root: str | Path, path: str | Path) -> str:
    """Return the file path of an asset below the asset root."""
    return str(Path(root) / path)


def _check_cell(size: Vector2Int) -> None:
    if size.x <= 0 or size.y <= 0:
        raise ValueError(f"cell size must be positive, got {size.x}x{size.y}")


def frame_positions(width: int, height: int, grid_size: Vector2Int) -> list[Rectangle]:
    """Return the frames of a sprite sheet in row-major order."""
    _check_cell(grid_size)
    per_row = width // grid_size.x
    rows = height // grid_size.y
    return [
        Rectangle(float(col * grid_size.x), float(row * grid_size.y),
                  float(grid_size.x), float(grid_size.y))
        for row in range(rows)
        for col in range(per_row)
    ]


def tile_positions(width: int, height: int, tile_size: Vector2Int) -> list[list[Rectangle]]:
    """Return the tiles of a tile set as a list of rows."""
    _check_cell(tile_size)
    per_row = width // tile_size.x
    rows = height // tile_size.y
    return [
        [
            Rectangle(float(col * tile_size.x), float(row * tile_size.y),
                      float(tile_size.x), float(tile_size.y))
            for col in range(per_row)
        ]
        for row in range(rows)
    ]


class AssetManager:
    """Loads textures and fonts by name and tracks which scene owns each of them."""

    def __init__(self, root: str | Path = DEFAULT_ROOT) -> None:
        self.root = Path(root)
        self._textures: dict[str, TextureData] = {}
        self._scene_textures: dict[int, list[str]] = {}
        self._fonts: dict[str, pygame.font.Font] = {}
        self._font_codepoints: dict[str, frozenset[int]] = {}
        self._scene_fonts: dict[int, list[str]] = {}

    def _file(self, path: str | Path) -> str:
        full = asset_path(self.root, path)
        if not Path(full).is_file():
            raise FileNotFoundError(f"asset not found: {full}")
        return full

    def _load_texture(self, path: str | Path) -> pygame.Surface:
        return pygame.image.load(self._file(path))

    def _load_font(self, path: str | Path, size: int) -> pygame.font.Font:
        full = self._file(path)
        if not pygame.font.get_init():
            pygame.font.init()
        return pygame.font.Font(full, size)

    def _store_texture(self, name: str, data: TextureData, scene_id: int) -> None:
        self._textures[name] = data
        self._scene_textures.setdefault(scene_id, []).append(name)

    def _store_font(self, name: str, font: pygame.font.Font, scene_id: int) -> None:
        # An already registered font keeps its first definition.
        self._fonts.setdefault(name, font)
        self._scene_fonts.setdefault(scene_id, []).append(name)

    def add_scene_texture(self, name: str, path: str | Path, scene_id: int) -> None:
        """Load a plain texture owned by a scene."""
        self._store_texture(name, TextureData(self._load_texture(path)), scene_id)

    def add_scene_animated_texture(self, name: str, path: str | Path, scene_id: int,
                                   grid_size: Vector2Int) -> None:
        """Load a sprite sheet cut into frames of ``grid_size``."""
        texture = self._load_texture(path)
        width, height = texture.get_size()
        data = TextureData(texture, TextureType.ANIMATED, grid_size,
                           frame_positions(width, height, grid_size))
        self._store_texture(name, data, scene_id)

    def add_scene_tiled_texture(self, name: str, path: str | Path, scene_id: int,
                                tile_size: Vector2Int) -> None:
        """Load a tile set cut into tiles of ``tile_size``."""
        texture = self._load_texture(path)
        width, height = texture.get_size()
        data = TextureData(texture, TextureType.TILED, tile_size,
                           tile_positions=tile_positions(width, height, tile_size))
        self._store_texture(name, data, scene_id)

    def add_scene_font(self, name: str, path: str | Path, scene_id: int,
                       font_size: int = 0) -> None:
        """Load a font; a size of zero or less loads it at the default size."""
        size = font_size if font_size > 0 else DEFAULT_FONT_SIZE
        self._store_font(name, self._load_font(path, size), scene_id)

    def add_scene_font_with_codepoints(self, name: str, path: str | Path, scene_id: int,
                                       font_size: int, codepoints: Iterable[int]) -> None:
        """Load a font meant for the given code points."""
        size = font_size if font_size > 0 else CODEPOINT_FONT_SIZE
        font = self._load_font(path, size)
        self._font_codepoints.setdefault(name, frozenset(codepoints))
        self._store_font(name, font, scene_id)

    def _data(self, name: str) -> TextureData:
        try:
            return self._textures[name]
        except KeyError:
            raise KeyError(f"no texture named {name!r}") from None

    def texture(self, name: str) -> pygame.Surface:
        return self._data(name).texture

    def texture_frame(self, name: str, frame: int) -> tuple[pygame.Surface, Rectangle]:
        """Return a texture and the source area of one animation frame.

        Textures that are not animated, and frames out of range, give the whole texture.
        """
        data = self._data(name)
        source = data.full_rect
        if data.type is TextureType.ANIMATED and 0 <= frame < len(data.frame_positions):
            source = data.frame_positions[frame]
        return data.texture, source

    def tile(self, name: str, tile_x: int, tile_y: int) -> tuple[pygame.Surface, Rectangle]:
        """Return a texture and the source area of one tile.

        Textures that are not tiled, and tiles out of range, give the whole texture.
        """
        data = self._data(name)
        source = data.full_rect
        if data.type is TextureType.TILED and 0 <= tile_y < len(data.tile_positions):
            row = data.tile_positions[tile_y]
            if 0 <= tile_x < len(row):
                source = row[tile_x]
        return data.texture, source

    def font(self, name: str) -> pygame.font.Font:
        try:
            return self._fonts[name]
        except KeyError:
            raise KeyError(f"no font named {name!r}") from None

    def remove_scene_textures(self, scene_id: int) -> None:
        """Release every texture and font owned by a scene."""
        for name in self._scene_textures.pop(scene_id, []):
            self._textures.pop(name, None)
        self.remove_scene_fonts(scene_id)

    def remove_scene_fonts(self, scene_id: int) -> None:
        """Release every font owned by a scene."""
        for name in self._scene_fonts.pop(scene_id, []):
            self._fonts.pop(name, None)
            self._font_codepoints.pop(name, None)


_manager: AssetManager | None = None


def get_asset_manager() -> AssetManager:
    """Return the shared asset manager, rooted at ``assets``."""
    global _manager
    if _manager is None:
        _manager = AssetManager()
    return _manager