"""Core enumerations, message names and defaults shared across the toolkit."""

from __future__ import annotations

import copy
import enum
from functools import reduce
from operator import or_
from typing import Any, Iterable

NULL_SIZE = (1 << 64) - 1
INVALID_ID = 0
TASK_PARAM_EMPTY = "{}"


class Status(enum.IntEnum):
    """Lifecycle state of a posted job."""

    INVALID = 0
    PENDING = 1000
    RUNNING = 2000
    SUCCESS = 3000
    FAILED = 4000


class GlobalOption(enum.IntEnum):
    """Process-wide options."""

    INVALID = 0
    # value: log directory as a string
    LOGGING = 1
    # value: bool
    DEBUG_MODE = 2


class ResOption(enum.IntEnum):
    """Resource options."""

    INVALID = 0


class CtrlOption(enum.IntEnum):
    """Controller options."""

    INVALID = 0
    # Only one of the long and short side may be set; the other follows the aspect ratio.
    SCREENSHOT_TARGET_LONG_SIDE = 1
    SCREENSHOT_TARGET_SHORT_SIDE = 2
    # Package/activity used when starting an app.
    DEFAULT_APP_PACKAGE_ENTRY = 3
    # Package used when stopping an app.
    DEFAULT_APP_PACKAGE = 4


class InstOption(enum.IntEnum):
    """Instance options."""

    INVALID = 0


class AdbControllerType(enum.IntFlag):
    """Bit fields selecting touch, key and screencap methods of an adb controller."""

    INVALID = 0

    TOUCH_ADB = 1
    TOUCH_MINITOUCH = 2
    TOUCH_MAATOUCH = 3
    TOUCH_MASK = 0xFF

    KEY_ADB = 1 << 8
    KEY_MAATOUCH = 2 << 8
    KEY_MASK = 0xFF00

    SCREENCAP_FASTEST_WAY = 1 << 16
    SCREENCAP_RAW_BY_NETCAT = 2 << 16
    SCREENCAP_RAW_WITH_GZIP = 3 << 16
    SCREENCAP_ENCODE = 4 << 16
    SCREENCAP_ENCODE_TO_FILE = 5 << 16
    SCREENCAP_MINICAP_DIRECT = 6 << 16
    SCREENCAP_MINICAP_STREAM = 7 << 16
    SCREENCAP_MASK = 0xFF0000

    INPUT_PRESET_ADB = TOUCH_ADB | KEY_ADB
    INPUT_PRESET_MINITOUCH = TOUCH_MINITOUCH | KEY_ADB
    INPUT_PRESET_MAATOUCH = TOUCH_MAATOUCH | KEY_MAATOUCH


class Message(str, enum.Enum):
    """Names of notifications emitted through callbacks."""

    INVALID = "Invalid"

    RESOURCE_START_LOADING = "Resource.StartLoading"
    RESOURCE_LOADING_COMPLETED = "Resource.LoadingCompleted"
    RESOURCE_LOADING_ERROR = "Resource.LoadingError"

    CONTROLLER_UUID_GOT = "Controller.UUIDGot"
    CONTROLLER_UUID_GET_FAILED = "Controller.UUIDGetFailed"
    CONTROLLER_RESOLUTION_GOT = "Controller.ResolutionGot"
    CONTROLLER_RESOLUTION_GET_FAILED = "Controller.ResolutionGetFailed"
    CONTROLLER_SCREENCAP_INITED = "Controller.ScreencapInited"
    CONTROLLER_SCREENCAP_INIT_FAILED = "Controller.ScreencapInitFailed"
    CONTROLLER_TOUCH_INPUT_INITED = "Controller.TouchinputInited"
    CONTROLLER_TOUCH_INPUT_INIT_FAILED = "Controller.TouchinputInitFailed"
    CONTROLLER_CONNECT_SUCCESS = "Controller.ConnectSuccess"
    CONTROLLER_CONNECT_FAILED = "Controller.ConnectFailed"
    CONTROLLER_ACTION_STARTED = "Controller.Action.Started"
    CONTROLLER_ACTION_COMPLETED = "Controller.Action.Completed"
    CONTROLLER_ACTION_FAILED = "Controller.Action.Failed"

    TASK_STARTED = "Task.Started"
    TASK_COMPLETED = "Task.Completed"
    TASK_FAILED = "Task.Failed"
    TASK_STOPPED = "Task.Stopped"

    def __str__(self) -> str:
        return self.value


_TYPE_NAMES: dict[str, AdbControllerType] = {
    "touch.adb": AdbControllerType.TOUCH_ADB,
    "touch.minitouch": AdbControllerType.TOUCH_MINITOUCH,
    "touch.maatouch": AdbControllerType.TOUCH_MAATOUCH,
    "key.adb": AdbControllerType.KEY_ADB,
    "key.maatouch": AdbControllerType.KEY_MAATOUCH,
    "screencap.fastest": AdbControllerType.SCREENCAP_FASTEST_WAY,
    "screencap.rawbynetcat": AdbControllerType.SCREENCAP_RAW_BY_NETCAT,
    "screencap.rawwithgzip": AdbControllerType.SCREENCAP_RAW_WITH_GZIP,
    "screencap.encode": AdbControllerType.SCREENCAP_ENCODE,
    "screencap.encodetofile": AdbControllerType.SCREENCAP_ENCODE_TO_FILE,
    "screencap.minicapdirect": AdbControllerType.SCREENCAP_MINICAP_DIRECT,
    "screencap.minicapstream": AdbControllerType.SCREENCAP_MINICAP_STREAM,
}


def parse_adb_controller_type(names: Iterable[str]) -> AdbControllerType:
    """Combine textual type names such as ``"touch.adb"`` into one flag value.

    Raises ValueError on an unknown name.
    """
    flags = []
    for name in names:
        try:
            flags.append(_TYPE_NAMES[name])
        except KeyError:
            raise ValueError(f"unknown adb controller type: {name!r}") from None
    return reduce(or_, flags, AdbControllerType.INVALID)


def _shell(*command: str) -> list[str]:
    return ["{ADB}", "-s", "{ADB_SERIAL}", *command]


_DEFAULT_ADB_CONFIG: dict[str, Any] = {
    "prebuilt": {
        "minicap": {
            "root": "./MaaAgentBinary/minicap",
            "arch": ["x86", "armeabi-v7a", "armeabi"],
            "sdk": [31, 29, 28, 27, 26, 25, 24, 23, 22, 21, 19, 18, 17, 16, 15, 14],
        },
        "minitouch": {
            "root": "./MaaAgentBinary/minitouch",
            "arch": ["x86_64", "x86", "arm64-v8a", "armeabi-v7a", "armeabi"],
        },
        "maatouch": {
            "root": "./MaaAgentBinary/maatouch",
            "package": "com.shxyke.MaaTouch.App",
        },
    },
    "argv": {
        "Connect": ["{ADB}", "connect", "{ADB_SERIAL}"],
        "KillServer": ["{ADB}", "kill-server"],
        "UUID": _shell("shell", "settings get secure android_id"),
        "Resolution": _shell(
            "shell", "dumpsys window displays | grep -o -E cur=+[^\\ ]+ | grep -o -E [0-9]+"
        ),
        "StartApp": _shell("shell", "am start -n {INTENT}"),
        "StopApp": _shell("shell", "am force-stop {INTENT}"),
        "Click": _shell("shell", "input tap {X} {Y}"),
        "Swipe": _shell("shell", "input swipe {X1} {Y1} {X2} {Y2} {DURATION}"),
        "PressKey": _shell("shell", "input keyevent {KEY}"),
        "ForwardSocket": _shell("forward", "tcp:{FOWARD_PORT}", "localabstract:{LOCAL_SOCKET}"),
        "NetcatAddress": _shell("shell", "cat /proc/net/arp | grep : "),
        "ScreencapRawByNetcat": _shell(
            "exec-out", "screencap | nc -w 3 {NETCAT_ADDRESS} {NETCAT_PORT}"
        ),
        "ScreencapRawWithGzip": _shell("exec-out", "screencap | gzip -1"),
        "ScreencapEncode": _shell("exec-out", "screencap -p"),
        "ScreencapEncodeToFile": _shell(
            "shell", 'screencap -p > "/data/local/tmp/{TEMP_FILE}"'
        ),
        "PullFile": _shell("pull", "/data/local/tmp/{TEMP_FILE}", "{DST_PATH}"),
        "Abilist": _shell("shell", "getprop ro.product.cpu.abilist | tr -d '\n\r'"),
        "SDK": _shell("shell", "getprop ro.build.version.sdk | tr -d '\n\r'"),
        "Orientation": _shell(
            "shell", "dumpsys input | grep SurfaceOrientation | grep -m 1 -o -E [0-9]"
        ),
        "PushBin": _shell("push", "{BIN_PATH}", "/data/local/tmp/{BIN_WORKING_FILE}"),
        "ChmodBin": _shell("shell", 'chmod 700 "/data/local/tmp/{BIN_WORKING_FILE}"'),
        "InvokeBin": _shell(
            "shell",
            'export LD_LIBRARY_PATH=/data/local/tmp/; "/data/local/tmp/{BIN_WORKING_FILE}" '
            "{BIN_EXTRA_PARAMS}",
        ),
        "InvokeApp": _shell(
            "shell",
            'export CLASSPATH="/data/local/tmp/{APP_WORKING_FILE}"; '
            "app_process /data/local/tmp {PACKAGE_NAME}",
        ),
    },
}


def default_adb_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in adb controller configuration."""
    return copy.deepcopy(_DEFAULT_ADB_CONFIG)