"""Moves the player with the arrow keys or WASD, inside the virtual screen."""

from __future__ import annotations

import pygame

from ..components import (
    PixelPerfectCameraComponent,
    PlayerComponent,
    Registry,
    SpriteComponent,
    TransformComponent,
)
from ..config import ENGINE_FIXED_TIME_STEP, PLAYER_MOVE_SPEED, VIRTUAL_HEIGHT, VIRTUAL_WIDTH
from ..keys import is_key_down


def _held(*keys: int) -> bool:
    return any(is_key_down(key) for key in keys)


def update(registry: Registry, delta_time: float) -> None:
    """Move every player by the held direction keys and keep it on screen."""
    delta_time = min(delta_time, ENGINE_FIXED_TIME_STEP)

    if next(registry.view(PixelPerfectCameraComponent), None) is None:
        return

    move_amount = PLAYER_MOVE_SPEED * delta_time

    for _, transform, player, sprite in registry.view(
        TransformComponent, PlayerComponent, SpriteComponent
    ):
        step = player.move_speed * move_amount
        position = transform.position

        if _held(pygame.K_RIGHT, pygame.K_d):
            position.x += step
        if _held(pygame.K_LEFT, pygame.K_a):
            position.x -= step
        if _held(pygame.K_UP, pygame.K_w):
            position.y -= step
        if _held(pygame.K_DOWN, pygame.K_s):
            position.y += step

        half_width = sprite.size.x / 2.0
        half_height = sprite.size.y / 2.0
        position.x = max(half_width, min(position.x, VIRTUAL_WIDTH - half_width))
        position.y = max(half_height, min(position.y, VIRTUAL_HEIGHT - half_height))