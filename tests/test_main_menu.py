import shutil
from pathlib import Path

import pygame
import pytest

from planegame.assets import get_asset_manager
from planegame.components import (
    PixelPerfectCameraComponent,
    TextComponentPixelPerfect,
    TransformComponent,
)
from planegame.config import GAME_TITLE, UI_MAIN_MENU_FONT_SIZE, VIRTUAL_HEIGHT, VIRTUAL_WIDTH
from planegame.keys import keyboard
from planegame.primitives import BLACK, DARKPURPLE, Rectangle
from planegame.renderer import get_renderer
from planegame.scenes.main_menu import SceneMainMenu
from planegame.systems.render_system import viewport


@pytest.fixture
def asset_dir(tmp_path, monkeypatch):
    fonts = tmp_path / "assets" / "fonts"
    fonts.mkdir(parents=True)
    default_font = Path(pygame.__file__).parent / pygame.font.get_default_font()
    shutil.copy(default_font, fonts / "Lander.ttf")
    shutil.copy(default_font, fonts / "Lander Bold.ttf")
    monkeypatch.chdir(tmp_path)
    keyboard().begin_frame()
    return tmp_path


@pytest.fixture
def menu(asset_dir):
    scene = SceneMainMenu()
    scene.load()
    yield scene
    scene.unload()


@pytest.fixture
def screen():
    renderer = get_renderer()
    previous = renderer.surface
    renderer.surface = pygame.Surface((800, 600))
    yield renderer.surface
    renderer.surface = previous


def _texts(scene):
    return {text.text: (transform, text)
            for _, transform, text in scene.registry.view(TransformComponent,
                                                          TextComponentPixelPerfect)}


def test_menu_has_title_and_prompts(menu):
    texts = _texts(menu)
    assert set(texts) == {GAME_TITLE, "INSERT CREDIT(S)", "OR PRESS ENTER"}
    assert texts[GAME_TITLE][1].tint == DARKPURPLE
    assert texts["INSERT CREDIT(S)"][1].tint == BLACK
    assert texts["OR PRESS ENTER"][1].font_size == UI_MAIN_MENU_FONT_SIZE
    assert texts[GAME_TITLE][1].font_size > texts["INSERT CREDIT(S)"][1].font_size


def test_texts_are_stacked_and_centred(menu):
    texts = _texts(menu)
    title, start, enter = (texts[k][0].position
                           for k in (GAME_TITLE, "INSERT CREDIT(S)", "OR PRESS ENTER"))
    assert title.y == pytest.approx(VIRTUAL_HEIGHT / 3)
    assert title.y < start.y < enter.y
    for position in (title, start, enter):
        assert 0 <= position.x <= VIRTUAL_WIDTH / 2


def test_prompt_fonts_follow_weight(menu):
    assets = get_asset_manager()
    texts = _texts(menu)
    assert texts["INSERT CREDIT(S)"][1].font is assets.font("lander_bold")
    assert texts["OR PRESS ENTER"][1].font is assets.font("lander")


def test_has_one_camera(menu):
    assert len(list(menu.registry.view(PixelPerfectCameraComponent))) == 1


def test_update_blinks_prompts(menu):
    menu.update(0.5)
    texts = _texts(menu)
    assert texts["INSERT CREDIT(S)"][1].tint.a == 0
    assert texts[GAME_TITLE][1].tint.a == 255


def test_draw_fits_viewport_to_screen(menu, screen):
    menu.draw()
    camera = next(menu.registry.view(PixelPerfectCameraComponent))[1]
    assert camera.dest_rec == Rectangle(*(float(v) for v in viewport(800, 600)))


def test_unload_releases_fonts(asset_dir):
    scene = SceneMainMenu()
    scene.load()
    scene.unload()
    with pytest.raises(KeyError):
        get_asset_manager().font("lander")


def test_missing_font_file_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        SceneMainMenu().load()