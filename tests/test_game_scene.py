import shutil
from pathlib import Path

import pygame
import pytest

from planegame.assets import get_asset_manager
from planegame.components import (
    BulletComponent,
    EnemyComponent,
    PixelPerfectCameraComponent,
    PlayerComponent,
    SpriteComponent,
    TransformComponent,
)
from planegame.config import ENEMY_DEFAULT_HEALTH, PLAYER_SPRITE_SIZE, VIRTUAL_HEIGHT, VIRTUAL_WIDTH
from planegame.keys import keyboard
from planegame.primitives import RED, WHITE, Rectangle
from planegame.renderer import get_renderer
from planegame.scenes.game_scene import SceneGame
from planegame.systems.render_system import viewport

KEYS = (pygame.K_SPACE, pygame.K_RIGHT)


@pytest.fixture
def asset_dir(tmp_path, monkeypatch):
    fonts = tmp_path / "assets" / "fonts"
    fonts.mkdir(parents=True)
    default_font = Path(pygame.__file__).parent / pygame.font.get_default_font()
    shutil.copy(default_font, fonts / "Lander.ttf")
    shutil.copy(default_font, fonts / "Lander Bold.ttf")
    plane = pygame.Surface((16, 16))
    plane.fill((10, 20, 30))
    pygame.image.save(plane, str(tmp_path / "assets" / "bomber_one.png"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def keys():
    state = keyboard()
    state.begin_frame()
    yield state
    for key in KEYS:
        state.handle_event(pygame.event.Event(pygame.KEYUP, key=key))
    state.begin_frame()


@pytest.fixture
def scene(asset_dir, keys):
    game_scene = SceneGame()
    game_scene.load()
    yield game_scene
    game_scene.unload()


@pytest.fixture
def screen():
    renderer = get_renderer()
    previous = renderer.surface
    renderer.surface = pygame.Surface((800, 600))
    yield renderer.surface
    renderer.surface = previous


def _player(scene):
    return next(scene.registry.view(TransformComponent, PlayerComponent, SpriteComponent))


def _press(state, key):
    state.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))


def test_player_spawns_centred_at_bottom(scene):
    _, transform, player, sprite = _player(scene)
    assert transform.position.x == 112.0
    assert transform.position.y == 235.0
    assert sprite.size.x == PLAYER_SPRITE_SIZE
    assert sprite.tint == WHITE
    assert sprite.texture is get_asset_manager().texture("player")


def test_enemy_spawns_near_top_facing_down(scene):
    enemies = list(scene.registry.view(TransformComponent, EnemyComponent, SpriteComponent))
    assert len(enemies) == 1
    _, transform, enemy, sprite = enemies[0]
    assert 0 <= transform.position.x <= VIRTUAL_WIDTH
    assert transform.position.y < VIRTUAL_HEIGHT / 2
    assert transform.rotation == 180.0
    assert enemy.health == ENEMY_DEFAULT_HEALTH
    assert sprite.tint == RED
    assert (sprite.origin.x, sprite.origin.y) == (sprite.size.x, sprite.size.y)


def test_single_camera_looks_at_its_offset(scene):
    cameras = list(scene.registry.view(PixelPerfectCameraComponent))
    assert len(cameras) == 1
    world = cameras[0][1].world_space_camera
    assert world.offset == world.target
    assert world.zoom == 1.0


def test_fire_key_spawns_bullet_on_update(scene, keys):
    _press(keys, pygame.K_SPACE)
    scene.update(0.0)
    bullets = list(scene.registry.view(TransformComponent, BulletComponent))
    assert len(bullets) == 1
    player_position = _player(scene)[1].position
    assert bullets[0][1].position == player_position


def test_held_direction_moves_player(scene, keys):
    before = _player(scene)[1].position.x
    _press(keys, pygame.K_RIGHT)
    scene.update(0.02)
    assert _player(scene)[1].position.x > before


def test_fixed_and_async_updates_leave_player_alone(scene):
    before = Rectangle(_player(scene)[1].position.x, _player(scene)[1].position.y)
    scene.fixed_update(0.02)
    scene.async_update(0.02)
    position = _player(scene)[1].position
    assert (position.x, position.y) == (before.x, before.y)


def test_draw_fits_viewport_to_screen(scene, screen):
    scene.draw()
    camera = next(scene.registry.view(PixelPerfectCameraComponent))[1]
    assert camera.dest_rec == Rectangle(*(float(v) for v in viewport(800, 600)))


def test_unload_releases_textures_and_systems(asset_dir, keys):
    game_scene = SceneGame()
    game_scene.load()
    game_scene.unload()
    with pytest.raises(KeyError):
        get_asset_manager().texture("player")
    _press(keys, pygame.K_SPACE)
    game_scene.update(0.0)
    assert list(game_scene.registry.view(BulletComponent)) == []