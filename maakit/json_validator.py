"""Checks for required keys in JSON request objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class RequestError(ValueError):
    """A request object lacks a key or holds a value of the wrong type."""


def require_key(obj: Mapping[str, Any], key: str) -> Any:
    """Value stored under ``key``; raises RequestError if it is absent."""
    try:
        return obj[key]
    except KeyError:
        raise RequestError(f"missing key: {key!r}") from None


def require_key_as_string(obj: Mapping[str, Any], key: str) -> str:
    """String stored under ``key``; raises RequestError otherwise."""
    value = require_key(obj, key)
    if not isinstance(value, str):
        raise RequestError(f"key {key!r} is not a string")
    return value


def require_key_as_string_array(obj: Mapping[str, Any], key: str) -> list[str]:
    """Array of strings stored under ``key``; raises RequestError otherwise."""
    value = require_key(obj, key)
    if not isinstance(value, list):
        raise RequestError(f"key {key!r} is not an array")
    if any(not isinstance(item, str) for item in value):
        raise RequestError(f"key {key!r} holds a non-string item")
    return list(value)