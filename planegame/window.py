"""The game window: creation, event polling, resizing and fullscreen."""

from __future__ import annotations

import os

import pygame

from .keys import keyboard

EXIT_KEY = pygame.K_ESCAPE


class Window:
    """A pygame display window that tracks whether it has been asked to close."""

    def __init__(self, width: int, height: int, title: str) -> None:
        self._width = width
        self._height = height
        self.title = title
        self._fullscreen = False
        self._close_requested = False
        self.position: tuple[int, int] | None = None
        pygame.display.init()
        pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_fullscreen(self) -> bool:
        return self._fullscreen

    @property
    def surface(self) -> pygame.Surface:
        """The display surface drawn on."""
        return pygame.display.get_surface()

    def should_close(self) -> bool:
        return self._close_requested

    def poll_events(self) -> list[pygame.event.Event]:
        """Start a new input frame, process pending events and return them."""
        keys = keyboard()
        keys.begin_frame()
        events = pygame.event.get()
        for event in events:
            keys.handle_event(event)
            if event.type == pygame.QUIT or (
                event.type == pygame.KEYDOWN and event.key == EXIT_KEY
            ):
                self._close_requested = True
        return events

    def _set_mode(self, size: tuple[int, int], position: tuple[int, int]) -> None:
        self.position = position
        os.environ["SDL_VIDEO_WINDOW_POS"] = f"{position[0]},{position[1]}"
        pygame.display.set_mode(size)

    def _monitor_size(self) -> tuple[int, int]:
        sizes = pygame.display.get_desktop_sizes()
        return sizes[0] if sizes else self.surface.get_size()

    def resize(self, new_width: int, new_height: int) -> None:
        self._width = new_width
        self._height = new_height
        pygame.display.set_mode((new_width, new_height))

    def toggle_fullscreen(self) -> None:
        """Switch between a monitor-sized window and a centred window of the set size."""
        self._fullscreen = not self._fullscreen
        monitor_width, monitor_height = self._monitor_size()
        if self._fullscreen:
            self._set_mode((monitor_width, monitor_height), (0, 0))
        else:
            x = (monitor_width - self._width) // 2
            y = (monitor_height - self._height) // 2
            self._set_mode((self._width, self._height), (x, y))

    def close(self) -> None:
        if pygame.display.get_init():
            pygame.display.quit()

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()