"""Ordered lists of systems run at each stage of a frame."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

SystemFunction = Callable[[Any, float], None]


class UpdateType(Enum):
    UPDATE = "update"
    FIXED_UPDATE = "fixed_update"
    ASYNC_UPDATE = "async_update"
    DRAW = "draw"


class SystemManager:
    """Keeps the systems registered for each update type, in registration order."""

    def __init__(self) -> None:
        self._systems: dict[UpdateType, list[SystemFunction]] = {
            kind: [] for kind in UpdateType
        }

    def add_system(self, system: SystemFunction, update_type: UpdateType) -> None:
        self._systems[update_type].append(system)

    def remove_system(self, system: SystemFunction, update_type: UpdateType) -> None:
        """Remove every registration of ``system`` under ``update_type``."""
        self._systems[update_type] = [s for s in self._systems[update_type] if s != system]

    def execute_systems(self, update_type: UpdateType, registry: Any,
                        delta_time: float) -> None:
        """Run the systems of one update type in the order they were added."""
        for system in tuple(self._systems[update_type]):
            system(registry, delta_time)

    def clear_systems(self, update_type: UpdateType) -> None:
        self._systems[update_type].clear()

    def clear_all_systems(self) -> None:
        for systems in self._systems.values():
            systems.clear()