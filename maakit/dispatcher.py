"""Routing of JSON requests to named endpoints."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional

from .json_validator import RequestError, require_key, require_key_as_string

Endpoint = Callable[[dict[str, Any]], Optional[dict[str, Any]]]


class ApiDispatcher:
    """Maps action names to endpoints taking a parameter object."""

    def __init__(self) -> None:
        self._endpoints: dict[str, Endpoint] = {}

    def register_route(self, name: str, endpoint: Endpoint) -> None:
        """Bind ``endpoint`` to ``name``, replacing any earlier binding."""
        self._endpoints[name] = endpoint

    def handle_route(self, request: Mapping[str, Any]) -> dict[str, Any] | None:
        """Run the endpoint named by ``request["action"]`` with ``request["param"]``.

        A missing ``param`` is passed as an empty object. Returns the endpoint's
        result, or None if the request is malformed, the action is unknown, or
        the endpoint rejects its parameters.
        """
        try:
            action = require_key_as_string(request, "action")
        except RequestError:
            return None
        endpoint = self._endpoints.get(action)
        if endpoint is None:
            return None

        try:
            param = require_key(request, "param")
        except RequestError:
            param = {}
        if not isinstance(param, dict):
            return None

        try:
            return endpoint(param)
        except RequestError:
            return None