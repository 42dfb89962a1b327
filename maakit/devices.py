"""Known adb devices and detection of running Android emulators."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Optional

from .defs import AdbControllerType
from .platform_info import ProcessInfo, list_processes


@dataclass
class Device:
    """A device reachable through adb."""

    name: str = ""
    adb_path: str = ""
    adb_serial: str = ""
    adb_controller_type: AdbControllerType = AdbControllerType.INVALID
    adb_config: str = ""


@dataclass(frozen=True)
class Emulator:
    """An emulator product, and the process it was found in once detected."""

    name: str
    process_keyword: str
    adb_relative_paths: tuple[PureWindowsPath, ...]
    adb_common_serials: tuple[str, ...]
    pid: int = 0
    process_name: str = ""

    def __str__(self) -> str:
        return f"[name={self.name}] [process_name={self.process_name}] [pid={self.pid}]"


def _paths(*paths: str) -> tuple[PureWindowsPath, ...]:
    return tuple(PureWindowsPath(p) for p in paths)


_MUMU_ADB = _paths(
    "vmonitor\\bin\\adb_server.exe",
    "MuMu\\emulator\\nemu\\vmonitor\\bin\\adb_server.exe",
    "adb.exe",
)

EMULATORS: tuple[Emulator, ...] = (
    Emulator(
        "BlueStacks",
        "HD-Player",
        _paths("HD-Adb.exe", "Engine\\ProgramFiles\\HD-Adb.exe"),
        (
            "127.0.0.1:5555", "127.0.0.1:5556", "127.0.0.1:5565", "127.0.0.1:5575",
            "127.0.0.1:5585", "127.0.0.1:5595", "127.0.0.1:5554",
        ),
    ),
    Emulator(
        "LDPlayer",
        "dnplayer",
        _paths("adb.exe"),
        (
            "emulator-5554", "emulator-5556", "emulator-5558", "emulator-5560",
            "127.0.0.1:5555", "127.0.0.1:5556", "127.0.0.1:5554",
        ),
    ),
    Emulator("Nox", "Nox", _paths("nox_adb.exe"), ("127.0.0.1:62001", "127.0.0.1:59865")),
    Emulator("MuMuPlayer6", "NemuPlayer", _MUMU_ADB, ("127.0.0.1:7555",)),
    Emulator(
        "MuMuPlayer12",
        "MuMuPlayer",
        _MUMU_ADB,
        (
            "127.0.0.1:16384", "127.0.0.1:16416", "127.0.0.1:16448", "127.0.0.1:16480",
            "127.0.0.1:16512", "127.0.0.1:16544", "127.0.0.1:16576",
        ),
    ),
    Emulator("MEmuPlayer", "MEmu", _paths("adb.exe"), ("127.0.0.1:21503",)),
)


class DeviceMgr:
    """Holds the known devices and detects emulators among running processes."""

    def __init__(
        self,
        devices: Iterable[Device] = (),
        process_lister: Callable[[], Iterable[ProcessInfo]] = list_processes,
    ) -> None:
        self._devices = list(devices)
        self._list_processes = process_lister
        self.emulators: list[Emulator] = []

    def find_device(self, adb_path: Optional[str] = None) -> int:
        """Rescan running emulators into ``emulators`` and return the device count.

        ``adb_path`` names the adb executable to query; no query is made with it.
        """
        self.emulators = self.get_emulators()
        return len(self._devices)

    def __len__(self) -> int:
        return len(self._devices)

    def device(self, index: int) -> Device:
        """Device at ``index``; raises IndexError when out of range."""
        if not 0 <= index < len(self._devices):
            raise IndexError(f"device index {index} out of range")
        return self._devices[index]

    def get_emulators(self) -> list[Emulator]:
        """Running processes whose name contains a known emulator keyword."""
        result: list[Emulator] = []
        for process in self._list_processes():
            match = next((e for e in EMULATORS if e.process_keyword in process.name), None)
            if match is None:
                continue
            result.append(dataclasses.replace(match, pid=process.pid, process_name=process.name))
        return result