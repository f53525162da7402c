"""The base of every scene and the identifiers scenes own their assets under."""

from __future__ import annotations

from enum import Enum

from ..components import Registry
from ..systems.system_manager import SystemManager, UpdateType


class SceneName(Enum):
    GAME = 0
    MAIN_MENU = 1


def to_scene_id(name: SceneName) -> int:
    """The integer id a scene registers its assets under."""
    return name.value


class Scene:
    """A layer of the game. Locking scenes stop updates below them; transparent
    scenes stop drawing below them.

    Each phase runs the systems registered for it on the scene's registry.
    """

    def __init__(self) -> None:
        self.is_locking = True
        self.is_transparent = False
        self.loaded = False
        self.registry = Registry()
        self.system_manager = SystemManager()

    def load(self) -> None:
        """Prepare the scene when it is pushed."""
        self.loaded = True

    def unload(self) -> None:
        """Release the scene's systems when it is removed."""
        self.system_manager.clear_all_systems()
        self.loaded = False

    def update(self, delta_time: float) -> None:
        """Advance one frame."""
        self.system_manager.execute_systems(UpdateType.UPDATE, self.registry, delta_time)

    def fixed_update(self, fixed_delta_time: float) -> None:
        """Advance one fixed time step."""
        self.system_manager.execute_systems(
            UpdateType.FIXED_UPDATE, self.registry, fixed_delta_time
        )

    def async_update(self, delta_time: float) -> None:
        """Non-rendering work, run on a worker thread."""
        self.system_manager.execute_systems(
            UpdateType.ASYNC_UPDATE, self.registry, delta_time
        )

    def draw(self) -> None:
        """Draw the scene."""
        self.system_manager.execute_systems(UpdateType.DRAW, self.registry, 0.0)