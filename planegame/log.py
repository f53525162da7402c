"""Console and file logging with an optional background writer thread."""

from __future__ import annotations

import os
import queue
import sys
import threading
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Severity of a log message, from least to most severe."""

    ALL = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6
    NONE = 7


GAME_LOG_FILE = "runtime.log"

DEBUG_BUILD = os.environ.get("PLANEGAME_DEBUG", "").lower() not in ("", "0", "false", "no")

# Messages at or below this level are dropped.
MIN_LOG_LEVEL = LogLevel.ALL if DEBUG_BUILD else LogLevel.DEBUG

_STOP = object()


def level_label(level: LogLevel | int) -> str:
    """Return the label printed for a level, such as ``WARNING``."""
    return LogLevel(level).name


def timestamp() -> str:
    """Return the local time as ``HH:MM:SS.mmm``."""
    now = datetime.now()
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def _format(message: Any, args: tuple[Any, ...]) -> str:
    return str(message) % args if args else str(message)


class Log:
    """Writes log lines to stdout and to a file, optionally through a writer thread."""

    def __init__(self, path: str | os.PathLike[str] = GAME_LOG_FILE,
                 async_mode: bool = not DEBUG_BUILD) -> None:
        self.path = Path(path)
        self.async_mode = async_mode
        self._file_lock = threading.Lock()
        self._file: TextIO | None = None
        self._queue: queue.Queue[object] = queue.Queue()
        self._writer: threading.Thread | None = None

        with self._file_lock:
            self._file = self._open("Failed to open log file")

        if async_mode:
            self._writer = threading.Thread(
                target=self._process_queue, name="log-writer", daemon=True
            )
            self._writer.start()

    def _open(self, failure: str) -> TextIO | None:
        try:
            return open(self.path, "w", encoding="utf-8")
        except OSError:
            print(f"{failure}: {self.path}", file=sys.stderr)
            return None

    def _write_to_file(self, line: str) -> None:
        with self._file_lock:
            if self._file is not None:
                self._file.write(line + "\n")
                self._file.flush()

    def _process_queue(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            self._write_to_file(str(item))

    def write(self, level: LogLevel | int, message: Any, *args: Any) -> str | None:
        """Log a message, %-formatted with args; return the line, or None if filtered."""
        level = LogLevel(level)
        if level <= MIN_LOG_LEVEL:
            return None
        line = f"{timestamp()} {level_label(level)} -> {_format(message, args)}"
        print(line)
        if self._writer is not None:
            self._queue.put(line)
        else:
            self._write_to_file(line)
        return line

    def restart(self) -> None:
        """Truncate the log file and start writing it afresh."""
        with self._file_lock:
            if self._file is not None:
                self._file.close()
            self._file = self._open("Failed to reopen log file")

    def shutdown(self) -> None:
        """Drain pending lines, stop the writer thread and close the file."""
        if self._writer is not None:
            self._queue.put(_STOP)
            self._writer.join()
            self._writer = None
        with self._file_lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> Log:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


class LogStream:
    """Collects pieces of a message and logs them as one line when the block ends."""

    def __init__(self, level: LogLevel | int, log: Log | None = None) -> None:
        self.level = LogLevel(level)
        self.should_log = self.level > MIN_LOG_LEVEL
        self._log = log
        self._parts: list[str] = []

    def write(self, value: Any) -> LogStream:
        """Append a value to the message; returns the stream for chaining."""
        if self.should_log:
            self._parts.append(str(value))
        return self

    def __lshift__(self, value: Any) -> LogStream:
        return self.write(value)

    def __enter__(self) -> LogStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        text = "".join(self._parts)
        self._parts.clear()
        if self.should_log and text:
            (self._log or get_log()).write(self.level, text)


_instance: Log | None = None
_instance_lock = threading.Lock()


def get_log() -> Log:
    """Return the shared log, creating it on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = Log()
        return _instance


def engine_log(level: LogLevel | int, message: Any, *args: Any) -> str | None:
    """Log a message from the engine, prefixed with ``ENGINE: ``."""
    if LogLevel(level) <= MIN_LOG_LEVEL:
        return None
    return get_log().write(level, "ENGINE: " + _format(message, args))


def shutdown() -> None:
    """Flush and close the shared log; a later get_log() opens a fresh one."""
    global _instance
    with _instance_lock:
        instance, _instance = _instance, None
    if instance is not None:
        instance.shutdown()