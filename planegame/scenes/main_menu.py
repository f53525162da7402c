"""The title screen shown when the game starts."""

from __future__ import annotations

import pygame

from ..assets import get_asset_manager
from ..components import PixelPerfectCameraComponent, TextComponentPixelPerfect, TransformComponent
from ..config import (
    FONT_LANDER,
    FONT_LANDER_BOLD,
    GAME_TITLE,
    UI_MAIN_MENU_FONT_SIZE,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
)
from ..log import LogLevel, get_log
from ..primitives import BLACK, DARKPURPLE, Camera2D, Color, Vector2
from ..systems import render_system
from ..systems.menu_system import INSERT_CREDIT_TEXT, PRESS_ENTER_TEXT, MenuSystem
from ..systems.system_manager import SystemManager, UpdateType
from .scene import Scene, SceneName, to_scene_id

SCENE_ID = to_scene_id(SceneName.MAIN_MENU)

FONT_NAME = "lander"
BOLD_FONT_NAME = "lander_bold"
TEXT_SPACING = 1.0


def _draw(registry, delta_time: float) -> None:
    render_system.draw_pixel_perfect(registry)


def _measure_text(font: pygame.font.Font, text: str, font_size: float,
                  spacing: float) -> Vector2:
    """Size of text drawn with ``font`` scaled to ``font_size``, glyphs ``spacing`` apart."""
    if not text:
        return Vector2(0.0, float(font_size))
    scale = font_size / max(font.get_height(), 1)
    width = sum(max(1, round(font.size(char)[0] * scale)) for char in text)
    return Vector2(width + spacing * (len(text) - 1), float(font_size))


class SceneMainMenu(Scene):
    """The game title with blinking prompts to start playing."""

    def __init__(self) -> None:
        super().__init__()
        self.system_manager = SystemManager()
        self.menu_system = MenuSystem()

    def load(self) -> None:
        self.system_manager.add_system(self.menu_system.update, UpdateType.UPDATE)
        self.system_manager.add_system(_draw, UpdateType.DRAW)

        assets = get_asset_manager()
        assets.add_scene_font(FONT_NAME, FONT_LANDER, SCENE_ID, UI_MAIN_MENU_FONT_SIZE)
        assets.add_scene_font(BOLD_FONT_NAME, FONT_LANDER_BOLD, SCENE_ID,
                              UI_MAIN_MENU_FONT_SIZE)

        self.setup_menu_entities()
        get_log().write(LogLevel.DEBUG, "Loaded the Main Menu scene")

    def unload(self) -> None:
        self.system_manager.clear_all_systems()
        get_asset_manager().remove_scene_textures(SCENE_ID)
        get_log().write(LogLevel.DEBUG, "Unloaded the Main Menu scene")

    def update(self, delta_time: float) -> None:
        self.system_manager.execute_systems(UpdateType.UPDATE, self.registry, delta_time)

    def draw(self) -> None:
        self.system_manager.execute_systems(UpdateType.DRAW, self.registry, 0.0)

    def _add_text(self, text: str, font: pygame.font.Font, font_size: int, tint: Color,
                  measure_font: pygame.font.Font, y: float) -> TextComponentPixelPerfect:
        component = TextComponentPixelPerfect(font=font, text=text, font_size=font_size,
                                              spacing=TEXT_SPACING, tint=tint)
        size = _measure_text(measure_font, text, font_size, TEXT_SPACING)
        transform = TransformComponent(position=Vector2((VIRTUAL_WIDTH - size.x) / 2.0, y))
        entity = self.registry.create()
        self.registry.emplace(entity, transform)
        self.registry.emplace(entity, component)
        return component

    def setup_menu_entities(self) -> None:
        """Create the camera and the horizontally centred title and prompts."""
        camera = PixelPerfectCameraComponent()
        camera.on_create()
        center = (VIRTUAL_WIDTH / 2.0, VIRTUAL_HEIGHT / 2.0)
        camera.world_space_camera = Camera2D(
            offset=Vector2(*center), target=Vector2(*center), rotation=0.0, zoom=1.0
        )
        camera.screen_space_camera = Camera2D(
            offset=Vector2(0.0, 0.0), target=Vector2(0.0, 0.0), rotation=0.0, zoom=1.0
        )
        self.registry.emplace(self.registry.create(), camera)

        assets = get_asset_manager()
        lander = assets.font(FONT_NAME)
        lander_bold = assets.font(BOLD_FONT_NAME)

        self._add_text(GAME_TITLE, lander_bold, UI_MAIN_MENU_FONT_SIZE * 2, DARKPURPLE,
                       lander, VIRTUAL_HEIGHT / 3.0)
        start = self._add_text(INSERT_CREDIT_TEXT, lander_bold, UI_MAIN_MENU_FONT_SIZE, BLACK,
                               lander, VIRTUAL_HEIGHT * 2.0 / 3.0 - 2.0)
        self._add_text(PRESS_ENTER_TEXT, lander, UI_MAIN_MENU_FONT_SIZE, BLACK,
                       lander, VIRTUAL_HEIGHT * 2.0 / 3.0 + start.font_size)