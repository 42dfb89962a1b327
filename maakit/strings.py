"""String replacement helpers and templated argument lists."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

Replacements = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def _pairs(replacements: Replacements) -> list[tuple[str, str]]:
    # A mapping is applied in key order, a sequence of pairs in the order given.
    if isinstance(replacements, Mapping):
        return sorted(replacements.items())
    return list(replacements)


def replace_all(text: str, replacements: Replacements) -> str:
    """Replace every occurrence of each key with its value, one pair after another.

    Text produced by a replacement is not scanned again for the same pair.
    Raises ValueError if a pattern is empty.
    """
    result = text
    for old, new in _pairs(replacements):
        if not old:
            raise ValueError("replacement pattern must not be empty")
        result = result.replace(old, new)
    return result


def trim(text: str) -> str:
    """Strip leading and trailing space characters (only ``' '``)."""
    return text.strip(" ")


@dataclass
class ArgvWrapper:
    """A command line template whose arguments may contain placeholders."""

    argv: list[str] = field(default_factory=list)

    def parse(self, value: Any) -> None:
        """Load the template from a JSON array of strings.

        Raises ValueError if ``value`` is not such an array; the current
        template is then left unchanged.
        """
        if not isinstance(value, list):
            raise ValueError("argv must be a JSON array")
        if any(not isinstance(item, str) for item in value):
            raise ValueError("argv must contain only strings")
        self.argv = list(value)

    def gen(self, replacement: Replacements) -> list[str]:
        """Return a copy of the template with placeholders substituted."""
        pairs = _pairs(replacement)
        return [replace_all(arg, pairs) for arg in self.argv]