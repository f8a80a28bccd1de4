"""Variable interpolation for template text and attribute values.

Supports two markers, both taking a dotted path and nothing else:
  - #{user.name} - HTML-escaped in text
  - !{user.name} - raw in text
Inside attribute values the two are equivalent; the caller escapes the
fully substituted value afterwards.
"""

from __future__ import annotations

import re
from typing import Any

from pdpug.values import Scope, escape_html, lookup, to_text

RAW_PATTERN = re.compile(r"!\{([a-zA-Z_][a-zA-Z0-9_.]*)\}")
ESCAPED_PATTERN = re.compile(r"#\{([a-zA-Z_][a-zA-Z0-9_.]*)\}")
ATTR_PATTERN = re.compile(r"[#!]\{([a-zA-Z_][a-zA-Z0-9_.]*)\}")


def interpolate_text(text: str, scope: Scope) -> str:
    """Interpolate !{path} (raw) then #{path} (escaped) placeholders.

    Args:
        text: Text content of a `|` line or an element's inline text.
        scope: Data visible at this point of the template.

    Returns:
        Interpolated string. Unresolved paths become empty strings.

    Example:
        >>> interpolate_text("Hi #{name}", {"name": "<Ana>"})
        'Hi &lt;Ana&gt;'
    """

    def raw(match: re.Match[str]) -> str:
        return _resolve_text(scope, match.group(1))

    def escaped(match: re.Match[str]) -> str:
        return escape_html(_resolve_text(scope, match.group(1)))

    text = RAW_PATTERN.sub(raw, text)
    return ESCAPED_PATTERN.sub(escaped, text)


def interpolate_attr(text: str, scope: Scope) -> str:
    """Interpolate #{path} and !{path} with raw values for an attribute."""

    def raw(match: re.Match[str]) -> str:
        return _resolve_text(scope, match.group(1))

    return ATTR_PATTERN.sub(raw, text)


def _resolve_text(scope: Any, path: str) -> str:
    return to_text(lookup(scope, path))
