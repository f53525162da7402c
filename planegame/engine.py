"""The main loop: window, rendering, fixed-step updates and background tasks."""

from __future__ import annotations

import functools
import math
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Callable

import pygame

from . import log
from .log import DEBUG_BUILD, LogLevel, engine_log
from .profiler import get_profiler, profile_scope
from .renderer import Renderer, get_renderer
from .window import Window


class GameBase(ABC):
    """What the engine drives: a game with a lifecycle and per-frame hooks."""

    @abstractmethod
    def load(self) -> None:
        """Prepare the game before the first frame."""

    @abstractmethod
    def unload(self) -> None:
        """Release the game after the last frame."""

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the game by one frame."""

    @abstractmethod
    def fixed_update(self, fixed_delta_time: float) -> None:
        """Advance the game by one fixed time step; runs on its own thread."""

    @abstractmethod
    def async_update(self, delta_time: float) -> None:
        """Non-rendering work for one frame; runs on a worker thread."""

    @abstractmethod
    def draw(self) -> None:
        """Draw the current frame."""


@dataclass
class FrameStats:
    """Frame times, in seconds, gathered since the last report."""

    frame_time_accumulator: float = 0.0
    frame_count: int = 0
    last_frame_time: float = 0.0
    min_frame_time: float = math.inf
    max_frame_time: float = 0.0

    def record(self, delta_time: float) -> None:
        """Add the duration of one frame."""
        self.frame_time_accumulator += delta_time
        self.frame_count += 1
        self.min_frame_time = min(self.min_frame_time, delta_time)
        self.max_frame_time = max(self.max_frame_time, delta_time)

    @property
    def average(self) -> float:
        return self.frame_time_accumulator / self.frame_count if self.frame_count else 0.0


@dataclass
class _Settings:
    frames_before_profiling: int = 60
    frame_stats_enabled: bool = True


_settings = _Settings()


def set_profiling_enabled(enabled: bool, frames_before_profiling: int = 60) -> None:
    """Turn profiling on or off and set how many frames pass between reports."""
    get_profiler().enabled = enabled
    _settings.frames_before_profiling = frames_before_profiling


def set_frame_stats_enabled(enabled: bool) -> None:
    """Turn the periodic frame time report on or off."""
    _settings.frame_stats_enabled = enabled


class Engine:
    """Runs a game: one render thread, one fixed-update thread and worker threads."""

    NUM_WORKER_THREADS = 4
    FIXED_TIME_STEP = 0.02
    MAX_QUEUED_TASKS = 1000
    MAX_ACCUMULATOR = 0.25
    TARGET_FPS = 60

    def __init__(self) -> None:
        self.window_title = ""
        self.frame_stats = FrameStats()
        self._game: GameBase | None = None
        self._accumulator = 0.0
        self._should_exit = False
        self._is_running = False

        self._fixed_cond = threading.Condition()
        self._fixed_thread: threading.Thread | None = None

        self._task_cond = threading.Condition()
        self._tasks: deque[Callable[[], None]] = deque()
        self._workers: list[threading.Thread] = []

        self._clock = pygame.time.Clock()

    @property
    def is_running(self) -> bool:
        return self._is_running

    def stop(self) -> None:
        """Ask the main loop to finish after the current frame."""
        self._is_running = False

    def queue_async_task(self, task: Callable[[], None]) -> bool:
        """Queue work for the worker threads; returns False if the queue is full."""
        with self._task_cond:
            if len(self._tasks) >= self.MAX_QUEUED_TASKS:
                engine_log(LogLevel.WARNING, "Task queue full, dropping task")
                return False
            self._tasks.append(task)
            self._task_cond.notify()
            return True

    def add_time(self, delta_time: float) -> None:
        """Add elapsed time for the fixed-update thread to consume in fixed steps."""
        with self._fixed_cond:
            self._accumulator += delta_time
            if self._accumulator >= self.FIXED_TIME_STEP:
                self._fixed_cond.notify()

    def _process_tasks(self) -> None:
        while True:
            with self._task_cond:
                self._task_cond.wait_for(lambda: self._tasks or self._should_exit)
                if self._should_exit:
                    return
                task = self._tasks.popleft()
            try:
                with profile_scope("AsyncTask"):
                    task()
            except Exception as exc:
                engine_log(LogLevel.ERROR, "Async task failed: %s", exc)

    def _process_fixed_updates(self) -> None:
        step = self.FIXED_TIME_STEP
        with self._fixed_cond:
            while True:
                self._fixed_cond.wait_for(
                    lambda: self._accumulator >= step or self._should_exit
                )
                if self._should_exit:
                    return
                if self._accumulator > self.MAX_ACCUMULATOR:
                    engine_log(LogLevel.WARNING,
                               "Fixed update falling behind, capping accumulator")
                    self._accumulator = self.MAX_ACCUMULATOR
                while self._accumulator >= step:
                    try:
                        with profile_scope("GameFixedUpdate"):
                            self._game.fixed_update(step)
                    except Exception as exc:
                        engine_log(LogLevel.ERROR, "Fixed update failed: %s", exc)
                    self._accumulator -= step

    def _async_update(self, delta_time: float) -> None:
        with profile_scope("AsyncUpdate"):
            self._game.async_update(delta_time)

    def _update_target_fps(self) -> None:
        engine_log(LogLevel.INFO, "Target FPS set to %d", self.TARGET_FPS)

    def _start_threads(self) -> None:
        with profile_scope("ThreadInitialization"):
            self._workers = [
                threading.Thread(target=self._process_tasks, name=f"engine-worker-{i}",
                                 daemon=True)
                for i in range(self.NUM_WORKER_THREADS)
            ]
            for worker in self._workers:
                worker.start()
            self._fixed_thread = threading.Thread(
                target=self._process_fixed_updates, name="engine-fixed-update", daemon=True
            )
            self._fixed_thread.start()

    def _cleanup(self) -> None:
        with profile_scope("CleanupResources"):
            self._should_exit = True
            self._is_running = False
            with self._task_cond:
                self._task_cond.notify_all()
            with self._fixed_cond:
                self._fixed_cond.notify()
            for worker in self._workers:
                worker.join()
            self._workers.clear()
            if self._fixed_thread is not None:
                self._fixed_thread.join()
                self._fixed_thread = None
            with self._task_cond:
                self._tasks.clear()

    def _report_frame_stats(self, now: float) -> None:
        stats = self.frame_stats
        average = stats.average
        engine_log(
            LogLevel.INFO,
            "Frame Stats - Avg: %.3f ms, Min: %.3f ms, Max: %.3f ms, FPS: %.1f",
            average * 1000.0, stats.min_frame_time * 1000.0,
            stats.max_frame_time * 1000.0, 1.0 / average if average > 0 else 0.0,
        )
        get_profiler().print_frame_stats()
        self.frame_stats = FrameStats(last_frame_time=now)

    def _frame(self, window: Window, renderer: Renderer, game: GameBase) -> None:
        now = time.perf_counter()
        delta_time = now - self.frame_stats.last_frame_time
        self.frame_stats.last_frame_time = now
        self.frame_stats.record(delta_time)

        with profile_scope("FixedUpdateAccumulation"):
            self.add_time(delta_time)

        self.queue_async_task(functools.partial(self._async_update, delta_time))

        with profile_scope("GameUpdate"):
            game.update(delta_time)

        with profile_scope("Rendering"):
            renderer.surface = window.surface
            renderer.begin_draw()
            renderer.clear()
            game.draw()
            renderer.end_draw()

        if (self.frame_stats.frame_count >= _settings.frames_before_profiling
                and _settings.frame_stats_enabled):
            self._report_frame_stats(now)

    def _run(self, window_width: int, window_height: int, window_title: str,
             game: GameBase) -> None:
        engine_log(LogLevel.INFO, "Engine initialization started")
        if DEBUG_BUILD:
            engine_log(LogLevel.WARNING, "RUNNING A DEBUG VERSION OF THE GAME!")

        self.window_title = window_title
        self._game = game
        self._accumulator = 0.0
        self._should_exit = False
        self._is_running = True

        engine_log(LogLevel.DEBUG, "Creating window (%dx%d): %s",
                   window_width, window_height, window_title)
        with Window(window_width, window_height, window_title) as window:
            self._update_target_fps()
            engine_log(LogLevel.DEBUG, "Window created successfully")

            renderer = get_renderer()
            renderer.surface = window.surface
            with profile_scope("InitializeRenderer"):
                renderer.initialize()
            engine_log(LogLevel.INFO, "Renderer initialized")

            self.frame_stats = FrameStats(last_frame_time=time.perf_counter())
            self._start_threads()

            engine_log(LogLevel.INFO, "Loading game...")
            with profile_scope("GameLoad"):
                game.load()
            engine_log(LogLevel.INFO, "Game loaded successfully")

            engine_log(LogLevel.DEBUG, "Starting main game loop")
            while self._is_running:
                window.poll_events()
                if window.should_close():
                    break
                with profile_scope("MainLoop"):
                    self._frame(window, renderer, game)
                self._clock.tick(self.TARGET_FPS)

            engine_log(LogLevel.DEBUG, "Unloading game...")
            with profile_scope("GameUnload"):
                game.unload()

            with profile_scope("ShutdownRenderer"):
                renderer.shutdown()
            engine_log(LogLevel.INFO, "Renderer shut down")

            self._cleanup()
        engine_log(LogLevel.DEBUG, "Engine shutdown completed successfully")

    def start(self, window_width: int, window_height: int, window_title: str,
              game: GameBase) -> None:
        """Open the window and run the game until it is stopped or the window closes.

        Errors are logged as fatal and end the run; the log is flushed on return.
        """
        try:
            with profile_scope("EngineStart"):
                self._run(window_width, window_height, window_title, game)
        except Exception as exc:
            engine_log(LogLevel.FATAL, "Engine exception: %s", exc)
            self._cleanup()

        engine_log(LogLevel.DEBUG, "Flushing logs and shutting down logging system")
        log.shutdown()