"""Data scope helpers: dotted-path lookup, truthiness and stringification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

Value = Union[str, int, float, bool, None, list, dict]
Scope = Mapping[str, Value]

# Characters treated as blank when stripping template lines.
WHITESPACE = " \t\n\r\0\x0b"

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(s: str) -> str:
    """Escape a string for HTML text nodes and double-quoted attributes."""
    return s.translate(_HTML_ESCAPES)


def lookup(scope: Any, path: str) -> Any:
    """Resolve a dotted path like 'user.name' against a scope.

    Descends through mappings by key and through lists by integer index.
    Any missing segment short-circuits to the empty string.

    Example:
        >>> lookup({"user": {"name": "Ana"}}, "user.name")
        'Ana'
        >>> lookup({}, "user.name")
        ''
    """
    value: Any = scope

    for part in path.split("."):
        if isinstance(value, Mapping):
            if part in value:
                value = value[part]
            elif part.isdecimal() and int(part) in value:
                value = value[int(part)]
            else:
                return ""
        elif isinstance(value, (list, tuple)):
            if not part.isdecimal() or int(part) >= len(value):
                return ""
            value = value[int(part)]
        else:
            return ""

    return value


def is_truthy(value: Any) -> bool:
    """Truthiness used by @if.

    Containers are truthy when non-empty, bools are themselves, numbers
    when non-zero. Everything else is stringified and must be neither
    blank nor "0".
    """
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) > 0
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    s = to_text(value).strip(WHITESPACE)
    return s != "" and s != "0"


def to_text(value: Any) -> str:
    """Render a scope value as template text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else ""
    if value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple, Mapping)):
        return "Array"
    return str(value)


def iter_items(value: Any) -> list[Any]:
    """Items visited by @foreach; non-containers give no iterations."""
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def bind_item(item: Any) -> Any:
    """Coerce a loop item before binding it to the loop variable.

    Containers are bound as they are, None becomes an empty mapping and any
    other scalar is wrapped as a single-entry mapping under key "0".
    """
    if isinstance(item, (Mapping, list, tuple)):
        return item
    if item is None:
        return {}
    return {"0": item}
