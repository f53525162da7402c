"""Main menu behaviour: blinking prompts and starting the game on Enter."""

from __future__ import annotations

import pygame

from ..components import Registry, TextComponentPixelPerfect
from ..game import switch_scene
from ..keys import is_key_pressed
from ..scenes.game_scene import SceneGame

BLINK_INTERVAL = 0.5
INSERT_CREDIT_TEXT = "INSERT CREDIT(S)"
PRESS_ENTER_TEXT = "OR PRESS ENTER"
BLINKING_TEXTS = frozenset({INSERT_CREDIT_TEXT, PRESS_ENTER_TEXT})
START_KEY = pygame.K_RETURN


class MenuSystem:
    """Blinks the start prompts and switches to the game when Enter is pressed."""

    def __init__(self) -> None:
        self.blink_timer = 0.0
        self.is_visible = True

    def update(self, registry: Registry, delta_time: float) -> None:
        self.blink_timer += delta_time
        if self.blink_timer >= BLINK_INTERVAL:
            self.blink_timer = 0.0
            self.is_visible = not self.is_visible

        alpha = 255 if self.is_visible else 0
        for _, text in registry.view(TextComponentPixelPerfect):
            if text.text in BLINKING_TEXTS:
                text.tint = text.tint.with_alpha(alpha)

        if is_key_pressed(START_KEY):
            switch_scene(SceneGame())