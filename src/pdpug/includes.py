"""Include expansion - flattens @include directives before rendering.

Each `@include "file"` line is replaced by the (recursively expanded) lines
of the referenced file, re-indented with the include line's own leading
whitespace so nesting composes with the include site.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable

from pdpug.exceptions import IncludeCycle, IncludeNotFound, TooManyIncludes
from pdpug.loader import join_path, read_lines
from pdpug.values import WHITESPACE

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 20

INCLUDE_DOUBLE = re.compile(r'@include\s+"([^"]+)"\s*', re.ASCII)
INCLUDE_SINGLE = re.compile(r"@include\s+'([^']+)'\s*", re.ASCII)


def match_include(line: str) -> str | None:
    """Return the include target of a (left-stripped) line, if any."""
    m = INCLUDE_DOUBLE.fullmatch(line) or INCLUDE_SINGLE.fullmatch(line)
    return m.group(1) if m else None


def canonical_path(path: str | Path) -> str:
    """Resolve symlinks where possible, for cycle detection."""
    try:
        return os.path.realpath(path)
    except OSError:
        return str(path)


def expand_includes(
    lines: list[str],
    base_dir: str | Path,
    depth: int = 0,
    seen: Iterable[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[str]:
    """Recursively replace @include lines with the lines they reference.

    Args:
        lines: Raw template lines.
        base_dir: Directory that relative include paths resolve against.
        depth: Current nesting depth.
        seen: Canonical paths already on the current inclusion chain.
        max_depth: Deepest nesting allowed before giving up.

    Returns:
        A new flat list of lines with every include spliced in.

    Raises:
        TooManyIncludes: If depth exceeds max_depth.
        IncludeNotFound: If an include target is not a file.
        IncludeCycle: If an include target is already on the chain.
    """
    if depth > max_depth:
        raise TooManyIncludes(depth, max_depth)

    chain = tuple(seen)
    out: list[str] = []

    for raw_line in lines:
        stripped = raw_line.lstrip(WHITESPACE)
        target = match_include(stripped)
        if target is None:
            out.append(raw_line)
            continue

        indent = raw_line[: len(raw_line) - len(stripped)]
        inc_path = join_path(base_dir, target)
        if not os.path.isfile(inc_path):
            raise IncludeNotFound(inc_path)

        real = canonical_path(inc_path)
        if real in chain:
            raise IncludeCycle(inc_path)

        log.debug(f"Including {inc_path} (depth {depth + 1})")
        inc_lines = expand_includes(
            read_lines(inc_path),
            os.path.dirname(inc_path) or ".",
            depth + 1,
            chain + (real,),
            max_depth,
        )
        out.extend(indent + line for line in inc_lines)

    return out
