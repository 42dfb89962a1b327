"""Process listing and memory page size."""

from __future__ import annotations

import mmap
import os
from dataclasses import dataclass, field
from pathlib import Path

_PROC_ROOT = Path("/proc")


@dataclass(frozen=True, order=True)
class ProcessInfo:
    """A running process; identity and ordering go by pid alone."""

    pid: int
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.pid} {self.name}"


def _read_exe(pid_dir: Path) -> str | None:
    try:
        return os.readlink(pid_dir / "exe")
    except OSError:
        return None


def list_processes() -> list[ProcessInfo]:
    """Running processes whose executable can be read, sorted by pid.

    Returns an empty list where no process filesystem is available.
    """
    if not _PROC_ROOT.is_dir():
        return []
    found: set[ProcessInfo] = set()
    for entry in _PROC_ROOT.iterdir():
        if not entry.name.isdigit() or not entry.is_dir():
            continue
        target = _read_exe(entry)
        if target is None or "/" not in target:
            continue
        found.add(ProcessInfo(int(entry.name), target.rsplit("/", 1)[1]))
    return sorted(found)


def get_process_path(pid: int) -> str:
    """Path of the executable of ``pid``, or an empty string if unknown."""
    return _read_exe(_PROC_ROOT / str(pid)) or ""


def get_page_size() -> int:
    """Size of a memory page in bytes."""
    if hasattr(os, "sysconf"):
        try:
            return int(os.sysconf("SC_PAGESIZE"))
        except (ValueError, OSError):
            pass
    return mmap.PAGESIZE