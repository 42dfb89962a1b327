# maakit

`maakit` gathers the building blocks an automation front end for Android
devices and emulators needs. It has no dependencies outside the standard
library.

| Module | What it holds |
| --- | --- |
| `maakit.defs` | Job statuses, option keys, callback message names, ADB controller type flags and the default ADB controller configuration |
| `maakit.async_runner` | `AsyncRunner`, a background worker that processes posted items in order, and `MessageNotifier` |
| `maakit.devices` | `DeviceMgr`, the known emulator products and detection of running emulators |
| `maakit.dispatcher` | `ApiDispatcher`, routing JSON requests to named endpoints |
| `maakit.json_validator` | Checks for required keys in request objects |
| `maakit.http_server` | `HttpServer`, serving a dispatcher over HTTP POST and WebSocket |
| `maakit.logger` | A line-oriented file logger with size-based rotation |
| `maakit.platform_info` | Process listing and memory page size |
| `maakit.strings` | String replacement and `ArgvWrapper` command templates |
| `maakit.cmdline` | Windows-style quoting of argument lists |
| `maakit.textcodec` | GBK/Unicode conversion and BOM-free file reading |
| `maakit.spline` | A cubic easing curve for swipe motion |

## ADB controller types

Controller types are bit flags; the textual names map onto them:

```python
from maakit.defs import AdbControllerType, parse_adb_controller_type

flags = parse_adb_controller_type(["touch.adb", "key.adb", "screencap.encode"])
assert flags & AdbControllerType.TOUCH_MASK == AdbControllerType.TOUCH_ADB
assert flags & AdbControllerType.SCREENCAP_MASK == AdbControllerType.SCREENCAP_ENCODE
```

An unknown name raises `ValueError`. `default_adb_config()` returns a fresh
copy of the default controller configuration, with the command templates for
each ADB operation under `"argv"` (placeholders such as `{ADB}` and
`{ADB_SERIAL}`).

`ArgvWrapper` fills such templates:

```python
from maakit.strings import ArgvWrapper

argv = ArgvWrapper()
argv.parse(["{ADB}", "-s", "{ADB_SERIAL}", "shell", "input tap {X} {Y}"])
argv.gen({"{ADB}": "adb", "{ADB_SERIAL}": "emulator-5554", "{X}": "10", "{Y}": "20"})
# ['adb', '-s', 'emulator-5554', 'shell', 'input tap 10 20']
```

## Running work in the background

```python
from maakit.async_runner import AsyncRunner
from maakit.defs import Status

def process(task_id, item):
    print("processing", task_id, item)
    return True

with AsyncRunner(process) as runner:
    task_id = runner.post("hello", block=True)
    assert runner.status(task_id) == Status.SUCCESS
```

Each item goes from `PENDING` to `RUNNING` to `SUCCESS` or `FAILED`; an
exception raised by the process function counts as a failure. Ids are shared
by all runners in the process. `clear()` drops queued items and forgets every
status; `release()` stops the worker.

`MessageNotifier(callback, callback_arg)` calls
`callback(msg, details_json, callback_arg)` with the details serialised to
JSON.

## A JSON API

```python
from maakit.dispatcher import ApiDispatcher

dispatcher = ApiDispatcher()
dispatcher.register_route("echo", lambda param: {"echo": param})

dispatcher.handle_route({"action": "echo", "param": {"x": 1}})
# {'echo': {'x': 1}}; unknown actions or malformed requests give None
```

`HttpServer` serves a dispatcher on a background thread:

```python
from maakit.http_server import HttpServer

server = HttpServer(dispatcher)
server.start("127.0.0.1", 0)   # False if already running
print(server.address)          # the bound (host, port)
server.stop()                  # RuntimeError if not running
```

A POST body holding `{"action": ..., "param": ...}` is answered with
`{"success": true, "data": ...}`, or with `{"success": false, "error": ...}`
and status 400 (not a POST, body not a JSON object) or 500 (the dispatcher
returned None). A WebSocket upgrade on GET switches the connection to text
frames carrying the same request and reply objects.

## Emulator detection

```python
from maakit.devices import DeviceMgr

mgr = DeviceMgr()
mgr.find_device()
for emulator in mgr.emulators:
    print(emulator.name, emulator.pid, emulator.adb_common_serials)
```

Running processes are matched by name against the known products
(BlueStacks, LDPlayer, Nox, MuMuPlayer 6 and 12, MEmuPlayer). A different
process source can be passed as `process_lister`. `list_processes()` reads
`/proc`, so it returns an empty list on systems without it.

## Logging

```python
from maakit.logger import get_logger

log = get_logger()
log.start_logging("debug")
with log.info("startup") as line:
    line << "ready" << {"port": 8080}
log.close()
```

Lines go to `maa.log` in the chosen directory; at start or `flush()` a log of
4 MiB or more is moved aside to `maa.bak.log`.

## Smaller helpers

- `maakit.cmdline`: `escape_one`, `args_to_cmd`, `cmd_to_args`.
- `maakit.textcodec`: `ansi_to_utf8`, `utf8_to_ansi`, `utf8_to_unicode_escape`,
  `load_file_without_bom`.
- `maakit.spline`: `CubicSpline.smooth_in_out(0.0, 0.0)` runs from 0.0 at
  `t=0` to 1.0 at `t=1`.

## What maakit does not do

- It has no model of task configurations and no configuration file on disk:
  there is nothing to define, order, save or load named task lists.
- It has no single façade object and no command-line program.
- The HTTP server comes with no routes of its own; every endpoint must be
  registered on the dispatcher by the caller.
- `DeviceMgr.find_device` does not query adb. It only rescans running
  emulator processes; its device list holds just the devices passed to it.

## Running the tests

The test suite uses pytest, declared in the `test` extra:

```
pip install -e .[test]
pytest
```