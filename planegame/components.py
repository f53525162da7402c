"""Entity registry and the components the game attaches to entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, TypeVar

import pygame

from .config import (
    ENEMY_DEFAULT_HEALTH,
    ENEMY_MOVE_SPEED,
    PLAYER_DEFAULT_BULLET_DAMAGE,
    PLAYER_DEFAULT_BULLET_SIZE,
    PLAYER_DEFAULT_BULLET_SPEED,
    PLAYER_DEFAULT_BULLETS,
    PLAYER_DEFAULT_LIVES,
    PLAYER_MAX_LIVES,
    PLAYER_MOVE_SPEED,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
)
from .primitives import BLANK, RED, WHITE, Camera2D, Color, Rectangle, Vector2

C = TypeVar("C", bound="Component")


class Component:
    """Base of all components, with lifecycle hooks.

    ``elapsed`` counts the time passed to :meth:`on_update`.
    """

    elapsed: float = 0.0

    def on_create(self) -> None:
        pass

    def on_update(self, delta_time: float) -> None:
        """Advance the component's lifetime by ``delta_time`` seconds."""
        self.elapsed += delta_time

    def on_destroy(self) -> None:
        pass


class Registry:
    """Holds entities and, per entity, at most one component of each exact type."""

    def __init__(self) -> None:
        self._next_id = 0
        self._entities: dict[int, dict[type, Component]] = {}

    def _components(self, entity: int) -> dict[type, Component]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"invalid entity: {entity}") from None

    def create(self) -> int:
        """Create a new entity and return its identifier."""
        entity = self._next_id
        self._next_id += 1
        self._entities[entity] = {}
        return entity

    def destroy(self, entity: int) -> None:
        """Remove an entity and all of its components."""
        self._components(entity)
        del self._entities[entity]

    def valid(self, entity: int) -> bool:
        return entity in self._entities

    def emplace(self, entity: int, component: C) -> C:
        """Attach a component to an entity and return it."""
        components = self._components(entity)
        kind = type(component)
        if kind in components:
            raise ValueError(f"entity {entity} already has a {kind.__name__}")
        components[kind] = component
        return component

    def get(self, entity: int, component_type: type[C]) -> C:
        components = self._components(entity)
        try:
            return components[component_type]  # type: ignore[return-value]
        except KeyError:
            raise KeyError(
                f"entity {entity} has no {component_type.__name__}"
            ) from None

    def has(self, entity: int, component_type: type) -> bool:
        return component_type in self._entities.get(entity, {})

    def view(self, *args: type) -> Iterator[tuple[Any, ...]]:
        """Iterate over ``(entity, *components)`` for entities holding every given type.

        Entities destroyed while iterating are skipped.
        """
        if not args:
            raise TypeError("view() needs at least one component type")
        return self._iter_view(args)

    def _iter_view(self, types: tuple[type, ...]) -> Iterator[tuple[Any, ...]]:
        for entity in list(self._entities):
            components = self._entities.get(entity)
            if components is None:
                continue
            if all(kind in components for kind in types):
                yield (entity, *(components[kind] for kind in types))

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities


@dataclass(eq=False)
class TransformComponent(Component):
    position: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0  # degrees


@dataclass(eq=False)
class TextComponent(Component):
    text: str = ""
    font_size: int = 0
    color: Color = BLANK


@dataclass(eq=False)
class TextComponentPro(Component):
    font: Any = None
    text: str = ""
    font_size: int = 0
    spacing: float = 0.0
    tint: Color = BLANK


@dataclass(eq=False)
class TextComponentPixelPerfect(TextComponentPro):
    pass


@dataclass(eq=False)
class CameraComponent(Component):
    camera: Camera2D = field(default_factory=Camera2D)


@dataclass(eq=False)
class RectangleComponent(Component):
    rectangle: Rectangle = field(default_factory=lambda: Rectangle(0, 0, 1, 1))
    color: Color = RED


@dataclass(eq=False)
class SpriteComponent(Component):
    texture: Any = None
    size: Vector2 = field(default_factory=lambda: Vector2(1, 1))
    origin: Vector2 = field(default_factory=Vector2)
    tint: Color = WHITE


@dataclass(eq=False)
class PixelPerfectCameraComponent(Component):
    """A world camera drawn into an off-screen target scaled onto the screen."""

    world_space_camera: Camera2D = field(default_factory=Camera2D)
    screen_space_camera: Camera2D = field(default_factory=Camera2D)
    target: pygame.Surface | None = None
    source_rec: Rectangle = field(default_factory=Rectangle)
    dest_rec: Rectangle = field(default_factory=Rectangle)

    def on_create(self) -> None:
        self.world_space_camera = Camera2D()
        self.screen_space_camera = Camera2D()
        self.target = pygame.Surface((VIRTUAL_WIDTH, VIRTUAL_HEIGHT))
        width, height = self.target.get_size()
        # Negative height marks the source as vertically flipped.
        self.source_rec = Rectangle(0.0, 0.0, float(width), -float(height))
        self.dest_rec = Rectangle(0.0, 0.0, float(VIRTUAL_WIDTH), float(VIRTUAL_HEIGHT))

    def on_destroy(self) -> None:
        self.target = None


class BulletType(Enum):
    PLAYER = "player"
    ENEMY = "enemy"


@dataclass(eq=False)
class PlayerComponent(Component):
    lives: int = PLAYER_DEFAULT_LIVES
    max_lives: int = field(default=PLAYER_MAX_LIVES, init=False)
    bullets: int = PLAYER_DEFAULT_BULLETS
    bullet_damage: int = PLAYER_DEFAULT_BULLET_DAMAGE
    bullet_speed: int = PLAYER_DEFAULT_BULLET_SPEED
    bullet_size: int = PLAYER_DEFAULT_BULLET_SIZE
    move_speed: float = PLAYER_MOVE_SPEED
    score: int = 0


@dataclass(eq=False)
class BulletComponent(Component):
    bullet_damage: int = PLAYER_DEFAULT_BULLET_DAMAGE
    bullet_speed: int = PLAYER_DEFAULT_BULLET_SPEED
    bullet_size: int = PLAYER_DEFAULT_BULLET_SIZE
    angle: float = 0.0  # degrees
    type: BulletType = BulletType.PLAYER
    score: int = 0


@dataclass(eq=False)
class EnemyComponent(Component):
    health: int = ENEMY_DEFAULT_HEALTH
    move_speed: float = ENEMY_MOVE_SPEED