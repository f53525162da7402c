"""The game: a stack of scenes driven by the engine from the top down."""

from __future__ import annotations

from .engine import GameBase
from .scenes.scene import Scene

_scenes: list[Scene] = []
_instance: Game | None = None


def scenes() -> tuple[Scene, ...]:
    """The scene stack, bottom first."""
    return tuple(_scenes)


def add_scene(scene: Scene) -> None:
    """Push a scene on top of the stack and load it."""
    _scenes.append(scene)
    scene.load()


def remove_top_scene() -> None:
    """Unload and drop the top scene; does nothing on an empty stack."""
    if not _scenes:
        return
    _scenes[-1].unload()
    _scenes.pop()


def switch_scene(scene: Scene) -> None:
    """Replace the top scene with another."""
    remove_top_scene()
    add_scene(scene)


class Game(GameBase):
    """Starts at the main menu and forwards each engine hook to the scene stack."""

    def load(self) -> None:
        global _instance
        _instance = self
        from .scenes.main_menu import SceneMainMenu

        add_scene(SceneMainMenu())

    def unload(self) -> None:
        global _instance
        for scene in reversed(tuple(_scenes)):
            scene.unload()
        _scenes.clear()
        _instance = None

    def update(self, delta_time: float) -> None:
        for scene in reversed(tuple(_scenes)):
            scene.update(delta_time)
            if scene.is_locking:
                break

    def fixed_update(self, fixed_delta_time: float) -> None:
        for scene in reversed(tuple(_scenes)):
            scene.fixed_update(fixed_delta_time)
            if scene.is_locking:
                break

    def async_update(self, delta_time: float) -> None:
        for scene in reversed(tuple(_scenes)):
            scene.async_update(delta_time)
            if scene.is_locking:
                break

    def draw(self) -> None:
        for scene in reversed(tuple(_scenes)):
            scene.draw()
            if scene.is_transparent:
                break