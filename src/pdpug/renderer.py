"""Renderer - turns expanded template lines into HTML.

Rendering walks the lines with a cursor. Nesting is driven purely by
indentation (2 spaces per level): every element line pushes an open tag,
and any later line at the same or a shallower level closes it. Directive
blocks (@if/@else, @foreach) are sliced out by indentation and rendered
recursively against the same or a derived scope.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from pdpug.config import EngineConfig
from pdpug.element import parse_element
from pdpug.includes import canonical_path, expand_includes
from pdpug.interpolate import interpolate_text
from pdpug.loader import read_lines, split_lines
from pdpug.values import WHITESPACE, Scope, bind_item, is_truthy, iter_items, lookup

log = logging.getLogger(__name__)

INDENT_WIDTH = 2
DOCTYPE = "<!doctype html>\n"

IF_DIRECTIVE = re.compile(r"@if\s+(\$?[a-zA-Z_][a-zA-Z0-9_.]*)\s*", re.ASCII)
FOREACH_DIRECTIVE = re.compile(
    r"@foreach\s+(\$?[a-zA-Z_][a-zA-Z0-9_.]*)\s+as\s+(\$?[a-zA-Z_][a-zA-Z0-9_]*)\s*",
    re.ASCII,
)


@dataclass
class OpenTag:
    """An element waiting for its closing tag."""

    tag: str
    level: int


@dataclass
class RenderContext:
    """Mutable state of one top-level render call.

    Owns the open-tag stack and the output buffer. Passed down through
    every recursive block render; never shared between calls.
    """

    stack: list[OpenTag] = field(default_factory=list)
    chunks: list[str] = field(default_factory=list)

    def write(self, s: str) -> None:
        self.chunks.append(s)

    def open(self, tag: str, level: int) -> None:
        self.stack.append(OpenTag(tag, level))

    def close_to_level(self, level: int) -> None:
        """Close open tags from the top while their level is >= level."""
        while self.stack and self.stack[-1].level >= level:
            top = self.stack.pop()
            self.write(f"</{top.tag}>\n")

    def getvalue(self) -> str:
        return "".join(self.chunks)


def indent_level(raw_line: str) -> int:
    """Nesting level of a line: leading spaces // 2. Tabs do not count."""
    spaces = len(raw_line) - len(raw_line.lstrip(" "))
    return spaces // INDENT_WIDTH


def capture_block(lines: list[str], start: int, level: int) -> int:
    """Return the end index of the run of lines deeper than level."""
    j = start
    while j < len(lines) and indent_level(lines[j]) > level:
        j += 1
    return j


def render_lines(
    lines: list[str],
    scope: Scope,
    base_dir: str | Path,
    ctx: RenderContext,
) -> None:
    """Render a list of expanded lines into ctx.

    Args:
        lines: Lines with includes already expanded.
        scope: Data visible to interpolation and directives.
        base_dir: Directory of the template being rendered.
        ctx: Render state (open-tag stack and output buffer).
    """
    n = len(lines)
    i = 0

    while i < n:
        raw_line = lines[i]

        if raw_line.strip(WHITESPACE) == "":
            i += 1
            continue

        level = indent_level(raw_line)
        line = raw_line.lstrip(WHITESPACE)

        # Siblings and dedents close everything at this level or deeper
        ctx.close_to_level(level)

        if line.startswith("//"):
            i += 1
            continue

        if line == "doctype html":
            ctx.write(DOCTYPE)
            i += 1
            continue

        if line.startswith("|"):
            text = line[1:].lstrip(WHITESPACE)
            ctx.write(interpolate_text(text, scope) + "\n")
            i += 1
            continue

        m = IF_DIRECTIVE.fullmatch(line)
        if m:
            path = m.group(1).lstrip("$")

            true_end = capture_block(lines, i + 1, level)
            true_block = lines[i + 1 : true_end]

            else_block: list[str] = []
            j = true_end
            if (
                j < n
                and indent_level(lines[j]) == level
                and lines[j].lstrip(WHITESPACE) == "@else"
            ):
                else_end = capture_block(lines, j + 1, level)
                else_block = lines[j + 1 : else_end]
                j = else_end

            chosen = true_block if is_truthy(lookup(scope, path)) else else_block
            if chosen:
                render_lines(chosen, scope, base_dir, ctx)
                ctx.close_to_level(level + 1)

            i = j
            continue

        if line == "@else":
            i += 1
            continue

        m = FOREACH_DIRECTIVE.fullmatch(line)
        if m:
            path = m.group(1).lstrip("$")
            var = m.group(2).lstrip("$")

            items = iter_items(lookup(scope, path))

            end = capture_block(lines, i + 1, level)
            block = lines[i + 1 : end]

            log.debug(f"@foreach {path} as {var}: {len(items)} item(s)")
            for item in items:
                child_scope = {**scope, var: bind_item(item)}
                render_lines(block, child_scope, base_dir, ctx)
                ctx.close_to_level(level + 1)

            i = end
            continue

        element = parse_element(line, scope)
        ctx.write(f"<{element.tag}{element.attrs}>")
        if element.text != "":
            ctx.write(interpolate_text(element.text, scope))
        ctx.write("\n")
        ctx.open(element.tag, level)

        i += 1


class Renderer:
    """Renders pdpug templates to HTML strings.

    Stateless apart from its configuration, so one instance can serve any
    number of (concurrent) render calls.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def render(self, template_path: str | Path, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render a template file.

        Args:
            template_path: Path to the .pdpug file.
            data: Nested mapping of values visible to the template.

        Returns:
            The complete HTML output.

        Raises:
            PdpugError: On missing/unreadable templates or include failures.
        """
        path = str(template_path)
        lines = read_lines(path)
        base_dir = os.path.dirname(path) or "."
        seen = (canonical_path(path),)

        log.debug(f"Rendering {path}")
        return self._render(lines, data, base_dir, seen)

    def render_string(
        self,
        source: str,
        data: Optional[Mapping[str, Any]] = None,
        base_dir: str | Path = ".",
    ) -> str:
        """Render template source held in memory.

        Includes are resolved relative to base_dir.
        """
        return self._render(split_lines(source), data, str(base_dir), ())

    def _render(
        self,
        lines: list[str],
        data: Optional[Mapping[str, Any]],
        base_dir: str,
        seen: tuple[str, ...],
    ) -> str:
        lines = expand_includes(
            lines, base_dir, seen=seen, max_depth=self.config.max_include_depth
        )

        ctx = RenderContext()
        render_lines(lines, dict(data or {}), base_dir, ctx)
        ctx.close_to_level(0)

        html = ctx.getvalue()
        log.debug(f"Rendered {len(lines)} line(s) into {len(html)} character(s)")
        return html


def render(
    template_path: str | Path,
    data: Optional[Mapping[str, Any]] = None,
    *,
    config: Optional[EngineConfig] = None,
) -> str:
    """Render a template file to an HTML string."""
    return Renderer(config).render(template_path, data)


def render_string(
    source: str,
    data: Optional[Mapping[str, Any]] = None,
    *,
    base_dir: str | Path = ".",
    config: Optional[EngineConfig] = None,
) -> str:
    """Render template source text to an HTML string."""
    return Renderer(config).render_string(source, data, base_dir)
