"""Spawns bullets on the fire key, moves them along their angle and drops them off screen."""

from __future__ import annotations

import math

import pygame

from ..assets import get_asset_manager
from ..components import (
    BulletComponent,
    BulletType,
    PlayerComponent,
    Registry,
    SpriteComponent,
    TransformComponent,
)
from ..config import (
    BULLET_BASE_HEIGHT,
    BULLET_BASE_WIDTH,
    ENEMY_BULLET_DAMAGE,
    ENEMY_BULLET_SPEED,
    PLAYER_DEFAULT_BULLET_SIZE,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
)
from ..keys import is_key_pressed
from ..primitives import RED, YELLOW, Color, Vector2

BULLET_TEXTURE_NAME = "bullet"
BULLET_TEXTURE_FILE = "bomber_one.png"
FIRE_KEY = pygame.K_SPACE
# How far past the virtual screen a bullet may travel before it is removed.
OFFSCREEN_MARGIN = 10.0
# Bullet speeds are expressed per frame at this rate.
REFERENCE_FPS = 60.0

_bullet_texture: pygame.Surface | None = None


def initialize(scene_id: int) -> None:
    """Load the bullet texture for a scene, once."""
    global _bullet_texture
    if _bullet_texture is None:
        assets = get_asset_manager()
        assets.add_scene_texture(BULLET_TEXTURE_NAME, BULLET_TEXTURE_FILE, scene_id)
        _bullet_texture = assets.texture(BULLET_TEXTURE_NAME)


def _tint(bullet_type: BulletType) -> Color:
    return YELLOW if bullet_type is BulletType.PLAYER else RED


def _size(bullet_size: int) -> Vector2:
    return Vector2(BULLET_BASE_WIDTH * bullet_size, BULLET_BASE_HEIGHT * bullet_size)


def _off_screen(position: Vector2) -> bool:
    return (position.y < -OFFSCREEN_MARGIN
            or position.y > VIRTUAL_HEIGHT + OFFSCREEN_MARGIN
            or position.x < -OFFSCREEN_MARGIN
            or position.x > VIRTUAL_WIDTH + OFFSCREEN_MARGIN)


def update(registry: Registry, delta_time: float) -> None:
    """Fire player bullets on the fire key, then move every bullet."""
    delta_factor = delta_time * REFERENCE_FPS

    if is_key_pressed(FIRE_KEY):
        for _, transform, player, _sprite in list(
            registry.view(TransformComponent, PlayerComponent, SpriteComponent)
        ):
            spawn_bullet(registry, transform.position, player, 0.0)

    for entity, transform, bullet, sprite in list(
        registry.view(TransformComponent, BulletComponent, SpriteComponent)
    ):
        radians = math.radians(bullet.angle)
        speed = float(bullet.bullet_speed) * delta_factor
        transform.position.x += math.sin(radians) * speed
        transform.position.y += -math.cos(radians) * speed

        sprite.size = _size(bullet.bullet_size)
        sprite.tint = _tint(bullet.type)

        if _off_screen(transform.position):
            registry.destroy(entity)


def spawn_bullet(registry: Registry, position: Vector2, props: PlayerComponent,
                 angle: float, bullet_type: BulletType = BulletType.PLAYER) -> int:
    """Create a bullet at ``position`` with the shooter's bullet properties."""
    entity = registry.create()
    registry.emplace(entity, TransformComponent(
        position=Vector2(position.x, position.y), rotation=angle,
    ))
    registry.emplace(entity, BulletComponent(
        bullet_damage=props.bullet_damage,
        bullet_speed=props.bullet_speed,
        bullet_size=props.bullet_size,
        angle=angle,
        type=bullet_type,
    ))
    registry.emplace(entity, SpriteComponent(
        texture=_bullet_texture,
        size=_size(props.bullet_size),
        tint=_tint(bullet_type),
    ))
    return entity


def spawn_enemy_bullet(registry: Registry, position: Vector2, angle: float) -> int:
    """Create a slower, weaker enemy bullet."""
    props = PlayerComponent(
        bullet_speed=ENEMY_BULLET_SPEED,
        bullet_size=PLAYER_DEFAULT_BULLET_SIZE,
        bullet_damage=ENEMY_BULLET_DAMAGE,
    )
    return spawn_bullet(registry, position, props, angle, BulletType.ENEMY)