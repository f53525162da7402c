"""The playing field: the player's plane, an enemy plane and the systems that run them."""

from __future__ import annotations

import random

from ..assets import get_asset_manager
from ..components import (
    EnemyComponent,
    PixelPerfectCameraComponent,
    PlayerComponent,
    Registry,
    SpriteComponent,
    TransformComponent,
)
from ..config import ENEMY_SPRITE_SIZE, PLAYER_SPRITE_SIZE, VIRTUAL_HEIGHT, VIRTUAL_WIDTH
from ..log import LogLevel, get_log
from ..primitives import RED, WHITE, Camera2D, Vector2
from ..systems import bullet_system, collision_system, movement_system, render_system
from ..systems.system_manager import SystemManager, UpdateType
from .scene import Scene, SceneName, to_scene_id

SCENE_ID = to_scene_id(SceneName.GAME)

PLAYER_TEXTURE_NAME = "player"
ENEMY_TEXTURE_NAME = "enemy"
PLANE_TEXTURE_FILE = "bomber_one.png"
# Gap between a freshly spawned plane and the screen edge it starts at.
SPAWN_MARGIN = 5.0
# Enemies face down the screen.
ENEMY_ROTATION = 180.0


def _draw(registry: Registry, delta_time: float) -> None:
    render_system.draw_pixel_perfect(registry)


def _create_camera(registry: Registry) -> int:
    entity = registry.create()
    camera = PixelPerfectCameraComponent()
    camera.on_create()
    center = (VIRTUAL_WIDTH / 2.0, VIRTUAL_HEIGHT / 2.0)
    camera.world_space_camera = Camera2D(
        offset=Vector2(*center), target=Vector2(*center), rotation=0.0, zoom=1.0
    )
    camera.screen_space_camera = Camera2D(
        offset=Vector2(0.0, 0.0), target=Vector2(0.0, 0.0), rotation=0.0, zoom=1.0
    )
    registry.emplace(entity, camera)
    return entity


class SceneGame(Scene):
    """The game itself: movement, shooting, collisions and pixel-perfect drawing."""

    def __init__(self) -> None:
        super().__init__()
        self.system_manager = SystemManager()

    def load(self) -> None:
        systems = self.system_manager
        systems.add_system(movement_system.update, UpdateType.UPDATE)
        systems.add_system(bullet_system.update, UpdateType.UPDATE)
        systems.add_system(collision_system.update, UpdateType.UPDATE)
        systems.add_system(_draw, UpdateType.DRAW)

        bullet_system.initialize(SCENE_ID)

        self.setup_camera()
        self.spawn_player()
        self.spawn_enemy()
        get_log().write(LogLevel.DEBUG, "Loaded the Game Scene")

    def unload(self) -> None:
        self.system_manager.clear_all_systems()
        get_asset_manager().remove_scene_textures(SCENE_ID)
        get_log().write(LogLevel.DEBUG, "Unloaded the Game Scene")

    def update(self, delta_time: float) -> None:
        self.system_manager.execute_systems(UpdateType.UPDATE, self.registry, delta_time)

    def fixed_update(self, fixed_delta_time: float) -> None:
        self.system_manager.execute_systems(
            UpdateType.FIXED_UPDATE, self.registry, fixed_delta_time
        )

    def async_update(self, delta_time: float) -> None:
        self.system_manager.execute_systems(UpdateType.ASYNC_UPDATE, self.registry, delta_time)

    def draw(self) -> None:
        self.system_manager.execute_systems(UpdateType.DRAW, self.registry, 0.0)

    def setup_camera(self) -> int:
        """Create the pixel-perfect camera looking at the centre of the virtual screen."""
        return _create_camera(self.registry)

    def spawn_player(self) -> int:
        """Create the player's plane centred at the bottom of the screen."""
        assets = get_asset_manager()
        assets.add_scene_texture(PLAYER_TEXTURE_NAME, PLANE_TEXTURE_FILE, SCENE_ID)

        sprite = SpriteComponent(
            texture=assets.texture(PLAYER_TEXTURE_NAME),
            size=Vector2(float(PLAYER_SPRITE_SIZE), float(PLAYER_SPRITE_SIZE)),
            tint=WHITE,
        )
        transform = TransformComponent(position=Vector2(
            VIRTUAL_WIDTH / 2.0,
            VIRTUAL_HEIGHT - (sprite.size.y / 2.0 + SPAWN_MARGIN),
        ))
        player = PlayerComponent()

        entity = self.registry.create()
        self.registry.emplace(entity, transform)
        self.registry.emplace(entity, player)
        self.registry.emplace(entity, sprite)

        get_log().write(LogLevel.DEBUG, "Player spawned with %d bullets", player.bullets)
        return entity

    def spawn_enemy(self) -> int:
        """Create a red enemy plane at a random column near the top, facing down."""
        assets = get_asset_manager()
        assets.add_scene_texture(ENEMY_TEXTURE_NAME, PLANE_TEXTURE_FILE, SCENE_ID)

        size = Vector2(float(ENEMY_SPRITE_SIZE), float(ENEMY_SPRITE_SIZE))
        sprite = SpriteComponent(
            texture=assets.texture(ENEMY_TEXTURE_NAME),
            size=size,
            origin=Vector2(size.x, size.y),
            tint=RED,
        )
        transform = TransformComponent(
            position=Vector2(
                float(random.randint(0, VIRTUAL_WIDTH)),
                size.y / 2.0 + SPAWN_MARGIN,
            ),
            rotation=ENEMY_ROTATION,
        )
        enemy = EnemyComponent()

        entity = self.registry.create()
        self.registry.emplace(entity, transform)
        self.registry.emplace(entity, enemy)
        self.registry.emplace(entity, sprite)

        get_log().write(LogLevel.DEBUG, "Enemy spawned with %d health", enemy.health)
        return entity