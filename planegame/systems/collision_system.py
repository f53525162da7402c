"""Bullet hits: player bullets damage enemies, enemy bullets cost the player lives."""

from __future__ import annotations

from ..components import (
    BulletComponent,
    BulletType,
    EnemyComponent,
    PlayerComponent,
    Registry,
    SpriteComponent,
    TransformComponent,
)
from ..primitives import Rectangle


def check_collision_recs(rec1: Rectangle, rec2: Rectangle) -> bool:
    """True if two rectangles overlap; touching edges do not count."""
    return (rec1.x < rec2.x + rec2.width
            and rec1.x + rec1.width > rec2.x
            and rec1.y < rec2.y + rec2.height
            and rec1.y + rec1.height > rec2.y)


def entity_rect(transform: TransformComponent, sprite: SpriteComponent) -> Rectangle:
    """The bounding box of a sprite centred on its transform position."""
    return Rectangle(
        transform.position.x - sprite.size.x / 2.0,
        transform.position.y - sprite.size.y / 2.0,
        sprite.size.x,
        sprite.size.y,
    )


def update(registry: Registry, delta_time: float) -> None:
    """Resolve this frame's bullet collisions, destroying what is used up."""
    player = next(registry.view(TransformComponent, PlayerComponent, SpriteComponent), None)
    player_rect = None
    if player is not None:
        player_entity, player_transform, player_comp, player_sprite = player
        player_rect = entity_rect(player_transform, player_sprite)

    for bullet_entity, bullet_transform, bullet, bullet_sprite in registry.view(
        TransformComponent, BulletComponent, SpriteComponent
    ):
        bullet_rect = entity_rect(bullet_transform, bullet_sprite)

        if bullet.type is BulletType.PLAYER:
            for enemy_entity, enemy_transform, enemy, enemy_sprite in registry.view(
                TransformComponent, EnemyComponent, SpriteComponent
            ):
                if check_collision_recs(bullet_rect, entity_rect(enemy_transform, enemy_sprite)):
                    enemy.health -= bullet.bullet_damage
                    registry.destroy(bullet_entity)
                    if enemy.health <= 0:
                        registry.destroy(enemy_entity)
                    break
        elif player_rect is not None and registry.valid(player_entity):
            if check_collision_recs(bullet_rect, player_rect):
                player_comp.lives -= 1
                registry.destroy(bullet_entity)
                if player_comp.lives <= 0:
                    registry.destroy(player_entity)