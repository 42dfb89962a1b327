"""Building blocks for Android automation: definitions, emulator detection, an async runner, a logger and a JSON API server."""

__version__ = "0.1.0"

__all__ = [
    "async_runner",
    "cmdline",
    "defs",
    "devices",
    "dispatcher",
    "http_server",
    "json_validator",
    "logger",
    "platform_info",
    "spline",
    "strings",
    "textcodec",
]