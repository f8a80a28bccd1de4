"""Element line parser.

Parses one element line such as

    a#home.nav.active(href="/", title=Home, hidden) Go back

into its tag name, rendered attribute string and trailing inline text.
The scanner never fails: malformed attribute syntax degrades to whatever
tokens can be recovered, and the rest are dropped.
"""

from __future__ import annotations

from typing import NamedTuple

from pdpug.interpolate import interpolate_attr
from pdpug.values import WHITESPACE, Scope, escape_html

IDENT_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"
)
LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")

# Whitespace separating attributes inside parentheses.
ATTR_SPACE = frozenset(" \t\n\r\f\x0b")

DEFAULT_TAG = "div"


class ParsedElement(NamedTuple):
    """Result of parsing one element line."""

    tag: str
    attrs: str  # rendered attributes, "" or starting with a space
    text: str  # inline text, not yet interpolated


def parse_element(line: str, scope: Scope) -> ParsedElement:
    """Parse an element line (already stripped of indentation).

    Args:
        line: The element line without leading indentation.
        scope: Data used to interpolate attribute values.

    Returns:
        ParsedElement with tag, attribute string and inline text.
    """
    n = len(line)
    i = 0

    tag = DEFAULT_TAG
    if n > 0 and line[0] in LETTERS:
        i = _scan_ident(line, 0)
        tag = line[:i] or DEFAULT_TAG

    element_id = ""
    classes: list[str] = []

    # #id and .class shorthands, in any order
    while i < n:
        ch = line[i]
        if ch == "#":
            end = _scan_ident(line, i + 1)
            element_id = line[i + 1 : end]
            i = end
            continue
        if ch == ".":
            end = _scan_ident(line, i + 1)
            if end > i + 1:
                classes.append(line[i + 1 : end])
            i = end
            continue
        break

    attrs_raw = ""
    if i < n and line[i] == "(":
        start = i
        depth = 0
        while i < n:
            if line[i] == "(":
                depth += 1
            if line[i] == ")":
                depth -= 1
                if depth == 0:
                    i += 1
                    break
            i += 1
        # Unbalanced parentheses drop the last character of the line.
        attrs_raw = line[start + 1 : i - 1]

    text = line[i:].strip(WHITESPACE)

    parts: list[str] = []
    if element_id:
        parts.append(f'id="{escape_html(element_id)}"')
    if classes:
        parts.append(f'class="{escape_html(" ".join(classes))}"')
    parts.extend(parse_attributes(attrs_raw, scope))

    attrs = " " + " ".join(parts) if parts else ""
    return ParsedElement(tag=tag, attrs=attrs, text=text)


def parse_attributes(raw: str, scope: Scope) -> list[str]:
    """Render the contents of an attribute list into `key="value"` parts.

    Attributes are separated by commas or by whitespace that precedes a
    `key=` pair. Tokens without `=` become boolean attributes.
    """
    parts: list[str] = []

    for token in split_attributes(raw.strip(WHITESPACE)):
        token = token.strip(WHITESPACE)
        if not token:
            continue

        if "=" not in token:
            key = _sanitize_key(token)
            if key:
                parts.append(key)
            continue

        key, value = token.split("=", 1)
        key = _sanitize_key(key.strip(WHITESPACE))
        value = value.strip(WHITESPACE)

        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]

        value = escape_html(interpolate_attr(value, scope))

        if key:
            parts.append(f'{key}="{value}"')

    return parts


def split_attributes(raw: str) -> list[str]:
    """Split an attribute list into raw tokens.

    Separators are `\\s*,\\s*` or a whitespace run followed by `name\\s*=`.
    Quotes are not special, so a comma inside a quoted value still splits.
    """
    tokens: list[str] = []
    n = len(raw)
    start = 0
    i = 0

    while i < n:
        j = _skip_space(raw, i)

        if j < n and raw[j] == ",":
            tokens.append(raw[start:i])
            start = i = _skip_space(raw, j + 1)
            continue

        if j > i and _key_follows(raw, j):
            tokens.append(raw[start:i])
            start = i = j
            continue

        i += 1

    tokens.append(raw[start:])
    return tokens


def _scan_ident(line: str, i: int) -> int:
    n = len(line)
    while i < n and line[i] in IDENT_CHARS:
        i += 1
    return i


def _skip_space(s: str, i: int) -> int:
    n = len(s)
    while i < n and s[i] in ATTR_SPACE:
        i += 1
    return i


def _key_follows(s: str, i: int) -> bool:
    """True if `name\\s*=` starts at position i."""
    end = _scan_ident(s, i)
    if end == i:
        return False
    end = _skip_space(s, end)
    return end < len(s) and s[end] == "="


def _sanitize_key(key: str) -> str:
    return "".join(ch for ch in key if ch in IDENT_CHARS)
