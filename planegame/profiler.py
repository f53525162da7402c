"""Named timing scopes with per-frame statistics."""

from __future__ import annotations

import math
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

from .log import LogLevel, engine_log


@dataclass
class ProfileData:
    """Accumulated timings, in milliseconds, for one named scope."""

    total_time: float = 0.0
    min_time: float = math.inf
    max_time: float = 0.0
    call_count: int = 0

    @property
    def average(self) -> float:
        return self.total_time / self.call_count if self.call_count else 0.0


class Profiler:
    """Collects scope timings and reports them through the engine log."""

    def __init__(self, enabled: bool = True) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, ProfileData] = {}
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        if not value:
            with self._lock:
                self._data.clear()

    @property
    def stats(self) -> dict[str, ProfileData]:
        """A copy of the timings collected since the last report."""
        with self._lock:
            return {name: replace(data) for name, data in self._data.items()}

    def record_time(self, name: str, milliseconds: float) -> None:
        """Add one timing for a scope; ignored while disabled."""
        if not self._enabled:
            return
        with self._lock:
            data = self._data.setdefault(name, ProfileData())
            data.total_time += milliseconds
            data.min_time = min(data.min_time, milliseconds)
            data.max_time = max(data.max_time, milliseconds)
            data.call_count += 1

    def print_frame_stats(self) -> dict[str, ProfileData]:
        """Log and clear the collected timings; return what was reported."""
        if not self._enabled:
            return {}
        with self._lock:
            reported, self._data = self._data, {}
        engine_log(LogLevel.INFO, "=== Frame Performance Stats ===")
        for name, data in reported.items():
            engine_log(
                LogLevel.INFO,
                "%s: Avg=%.3fms, Min=%.3fms, Max=%.3fms, Calls=%d",
                name, data.average, data.min_time, data.max_time, data.call_count,
            )
        engine_log(LogLevel.INFO, "=============================")
        return reported

    @contextmanager
    def scope(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under ``name``."""
        if not self._enabled:
            yield
            return
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            if self._enabled:
                elapsed_us = (time.perf_counter_ns() - start) // 1000
                self.record_time(name, elapsed_us / 1000.0)


_profiler = Profiler()


def get_profiler() -> Profiler:
    """Return the shared profiler."""
    return _profiler


def profile_scope(name: str):
    """Time a block with the shared profiler."""
    return _profiler.scope(name)