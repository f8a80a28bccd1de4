"""Template environment: named templates under one directory plus layouts.

A page is rendered in two passes: the view itself, then a layout that
receives the view's HTML under `content` (or the configured key) and emits
it with `!{content}`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pdpug.config import EngineConfig
from pdpug.renderer import Renderer

log = logging.getLogger(__name__)


class Environment:
    """Resolves template names and renders views inside layouts."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.template_dir = self.config.template_dir or Path.cwd()
        self.renderer = Renderer(self.config)

    def resolve(self, name: str | Path) -> Path:
        """Turn a template name into a path.

        Names without a suffix get the configured extension; relative names
        resolve against template_dir.
        """
        p = Path(name)
        if not p.suffix:
            p = p.with_name(p.name + self.config.extension)
        if p.is_absolute():
            return p
        return self.template_dir / p

    def render(self, name: str | Path, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render a single named template."""
        return self.renderer.render(self.resolve(name), data)

    def render_page(
        self,
        name: str | Path,
        data: Optional[Mapping[str, Any]] = None,
        *,
        layout: Optional[str | Path] = None,
        layout_data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a view and wrap it in a layout.

        Args:
            name: View template name.
            data: Data for the view.
            layout: Layout template name. Defaults to config.layout; with
                neither set the view HTML is returned as is.
            layout_data: Extra data for the layout (e.g. page_title).

        Returns:
            The full page HTML.
        """
        content = self.render(name, data)

        layout_name = layout if layout is not None else self.config.layout
        if layout_name is None:
            return content

        log.debug(f"Wrapping {name} in layout {layout_name}")
        wrapper = dict(layout_data or {})
        wrapper[self.config.content_key] = content
        return self.render(layout_name, wrapper)
