"""Small geometric and colour value types shared by the engine and the game."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

import pygame


@dataclass(frozen=True)
class Vector2Int:
    """An integer 2D vector, used for grid and tile sizes."""

    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass
class Vector2:
    """A mutable floating-point 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass
class Rectangle:
    """An axis-aligned rectangle; a negative size means a flipped source area."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_pygame(self) -> pygame.Rect:
        """Return the rectangle as a pygame.Rect with truncated coordinates."""
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.width
        yield self.height


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    def with_alpha(self, alpha: int) -> Color:
        """Return a copy of this colour with a different alpha channel."""
        return replace(self, a=alpha)

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a


@dataclass
class Camera2D:
    """A 2D camera: offset and target in world space, rotation in degrees."""

    offset: Vector2 = field(default_factory=Vector2)
    target: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0
    zoom: float = 1.0


LIGHTGRAY = Color(200, 200, 200)
GRAY = Color(130, 130, 130)
DARKGRAY = Color(80, 80, 80)
YELLOW = Color(253, 249, 0)
GOLD = Color(255, 203, 0)
ORANGE = Color(255, 161, 0)
PINK = Color(255, 109, 194)
RED = Color(230, 41, 55)
MAROON = Color(190, 33, 55)
GREEN = Color(0, 228, 48)
LIME = Color(0, 158, 47)
DARKGREEN = Color(0, 117, 44)
SKYBLUE = Color(102, 191, 255)
BLUE = Color(0, 121, 241)
DARKBLUE = Color(0, 82, 172)
PURPLE = Color(200, 122, 255)
VIOLET = Color(135, 60, 190)
DARKPURPLE = Color(112, 31, 126)
WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
BLANK = Color(0, 0, 0, 0)
MAGENTA = Color(255, 0, 255)
RAYWHITE = Color(245, 245, 245)