"""Keyboard state fed from pygame events."""

from __future__ import annotations

import pygame


class KeyboardState:
    """Tracks which keys are held and which went down during the current frame."""

    def __init__(self) -> None:
        self._down: set[int] = set()
        self._pressed: set[int] = set()

    def begin_frame(self) -> None:
        """Forget the keys pressed during the previous frame."""
        self._pressed.clear()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            # Auto-repeat of a held key is not a new press.
            if event.key not in self._down:
                self._pressed.add(event.key)
            self._down.add(event.key)
        elif event.type == pygame.KEYUP:
            self._down.discard(event.key)

    def is_pressed(self, key: int) -> bool:
        """True if the key went down during this frame."""
        return key in self._pressed

    def is_down(self, key: int) -> bool:
        """True while the key is held."""
        return key in self._down


_keyboard = KeyboardState()


def keyboard() -> KeyboardState:
    """Return the shared keyboard state."""
    return _keyboard


def is_key_pressed(key: int) -> bool:
    return _keyboard.is_pressed(key)


def is_key_down(key: int) -> bool:
    return _keyboard.is_down(key)