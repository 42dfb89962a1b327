"""Line-oriented file logger with size-based rotation."""

from __future__ import annotations

import enum
import json
import os
import threading
import time
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import IO, Any

LOG_FILENAME = "maa.log"
LOGBAK_FILENAME = "maa.bak.log"
MAX_LOG_SIZE = 4 * 1024 * 1024
VERSION = "DEBUG_VERSION"

_SPLIT_LINE = "-----------------------------"


class Level(enum.Enum):
    """Severity of a log line."""

    TRACE = "TRC"
    DEBUG = "DBG"
    INFO = "INF"
    WARN = "WRN"
    ERROR = "ERR"

    @property
    def label(self) -> str:
        return self.value


def format_now() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS.mmm``.

    The month is zero-based, as the broken-down time structure counts it.
    """
    now = datetime.now()
    return (
        f"{now.year:04}-{now.month - 1:02}-{now.day:02} "
        f"{now.hour:02}:{now.minute:02}:{now.second:02}.{now.microsecond // 1000:03}"
    )


def now_filestem() -> str:
    """Current local time in a form usable as a file name stem."""
    now = datetime.now()
    return (
        f"{now.year:04}.{now.month - 1:02}.{now.day:02}-"
        f"{now.hour:02}.{now.minute:02}.{now.second:02}.{now.microsecond}"
    )


def duration_since(start: float) -> int:
    """Whole milliseconds elapsed since ``start``, a ``time.monotonic()`` reading."""
    return int((time.monotonic() - start) * 1000)


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {_render(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    return _render(value)


def _render(value: Any) -> str:
    if value is None:
        return "<nullopt>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return json.dumps(_jsonable(value), ensure_ascii=False, separators=(",", ":"))
    return str(value)


class LogStream:
    """One log line under construction; written when closed."""

    def __init__(self, logger: Logger, level: Level, *args: Any) -> None:
        self._logger = logger
        self._parts: list[str] = []
        self._closed = False
        tid = threading.get_ident() & 0xFFFF
        props = f"[{format_now()}][{level.label}][Px{os.getpid()}][Tx{tid}]"
        props += "".join(f"[{arg}]" for arg in args)
        self << props

    def __lshift__(self, value: Any) -> LogStream:
        self._parts.append(_render(value) + " ")
        return self

    def __enter__(self) -> LogStream:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Write the line to the log file, once."""
        if self._closed:
            return
        self._closed = True
        self._logger._write_line("".join(self._parts))

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass


class Logger:
    """Writes log lines to ``maa.log`` in a directory chosen at run time."""

    def __init__(self) -> None:
        self._dir: Path | None = None
        self._path: Path | None = None
        self._file: IO[str] | None = None
        self._lock = threading.Lock()

    @property
    def log_path(self) -> Path | None:
        return self._path

    def start_logging(self, directory: str | os.PathLike[str]) -> None:
        """Log into ``directory``, rotating an oversized previous log first."""
        self._dir = Path(directory)
        self._path = self._dir / LOG_FILENAME
        self._rotate()
        self._open()
        self._log_proc_info()

    def flush(self) -> None:
        """Reopen the log file, rotating it if it grew too large."""
        self._internal(_SPLIT_LINE)
        self._internal("Flush log")
        self._internal(_SPLIT_LINE)
        rotated = self._rotate()
        self._open()
        if rotated:
            self._log_proc_info()

    def close(self) -> None:
        """Write a closing banner and close the log file."""
        self._internal(_SPLIT_LINE)
        self._internal("Close log")
        self._internal(_SPLIT_LINE)
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def trace(self, *args: Any) -> LogStream:
        return LogStream(self, Level.TRACE, *args)

    def debug(self, *args: Any) -> LogStream:
        return LogStream(self, Level.DEBUG, *args)

    def info(self, *args: Any) -> LogStream:
        return LogStream(self, Level.INFO, *args)

    def warn(self, *args: Any) -> LogStream:
        return LogStream(self, Level.WARN, *args)

    def error(self, *args: Any) -> LogStream:
        return LogStream(self, Level.ERROR, *args)

    def _write_line(self, line: str) -> None:
        with self._lock:
            if self._file is None:
                return
            self._file.write(line + "\n")
            self._file.flush()

    def _internal(self, *values: Any) -> None:
        with self.debug("Logger") as stream:
            for value in values:
                stream << value

    def _rotate(self) -> bool:
        if self._path is None or not self._path.exists():
            return False
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            if self._path.stat().st_size < MAX_LOG_SIZE:
                return False
            try:
                os.replace(self._path, self._path.parent / LOGBAK_FILENAME)
            except OSError:
                return False
        return True

    def _open(self) -> None:
        if self._path is None or self._dir is None:
            return
        self._dir.mkdir(parents=True, exist_ok=True)
        with self._lock:
            if self._file is not None:
                self._file.close()
            self._file = open(self._path, "a", encoding="utf-8")

    def _log_proc_info(self) -> None:
        self._internal(_SPLIT_LINE)
        self._internal("MAA Process Start")
        self._internal("Version", VERSION)
        self._internal("Log Path", self._path)
        self._internal(_SPLIT_LINE)


_LOGGER = Logger()


def get_logger() -> Logger:
    """The process-wide logger."""
    return _LOGGER