"""Template file loading and include path joining."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from pdpug.exceptions import TemplateNotFound, TemplateReadError

log = logging.getLogger(__name__)

DRIVE_PATH = re.compile(r"[A-Za-z]:[\\/]")


def read_lines(path: str | Path) -> list[str]:
    """Read a template into lines.

    Trailing newlines are stripped, leading whitespace is kept verbatim.

    Raises:
        TemplateNotFound: If path is not a regular file.
        TemplateReadError: If the file exists but cannot be read or decoded.
    """
    p = Path(path)
    if not p.is_file():
        raise TemplateNotFound(str(path))

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateReadError(str(path), str(e)) from e

    log.debug(f"Loaded template {p}")
    return split_lines(text)


def split_lines(text: str) -> list[str]:
    """Split source text on newlines, dropping a trailing CR from each line."""
    if not text:
        return []

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_path(base_dir: str | Path, rel: str) -> str:
    """Join an include path onto the including file's directory.

    Absolute paths (leading `/`, `\\` or a drive letter) pass through.

    Example:
        >>> join_path("/views", "partials/nav.pdpug")  # doctest: +SKIP
        '/views/partials/nav.pdpug'
    """
    if rel.startswith("/") or rel.startswith("\\") or DRIVE_PATH.match(rel):
        return rel

    base = str(base_dir).rstrip("/\\")
    return base + os.sep + rel.replace("/", os.sep).replace("\\", os.sep)
