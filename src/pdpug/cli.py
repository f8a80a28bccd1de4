"""PDpug CLI Entry Point

Usage:
    pdpug render page.pdpug                      # Render to stdout
    pdpug render page.pdpug -d data.yaml         # Render with YAML/JSON data
    pdpug render page.pdpug -s title=Recipes     # Override a top-level value
    pdpug render page.pdpug -l layout.pdpug      # Wrap in a layout
    pdpug render page.pdpug -o out.html          # Write to file
    pdpug --version                              # Show version
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ._version import __version__
from .config import EngineConfig, load_config, load_data
from .environment import Environment
from .exceptions import PdpugError

log = logging.getLogger(__name__)

console = Console(stderr=True)

typer_app = typer.Typer(help="Render pdpug templates to HTML.")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the pdpug CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (PDPUG_DEBUG=1): DEBUG level - includes, loops, render sizes
    """
    if os.environ.get("PDPUG_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=bool(os.environ.get("PDPUG_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    pdpug_logger = logging.getLogger("pdpug")
    pdpug_logger.setLevel(level)
    pdpug_logger.handlers = [handler]
    pdpug_logger.propagate = False


def parse_assignments(assignments: Optional[List[str]]) -> dict[str, Any]:
    """Parse repeated `key=value` options into a mapping."""
    result: dict[str, Any] = {}
    for item in assignments or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got: {item}")
        result[key] = value
    return result


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pdpug {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Render pdpug templates to HTML."""


@typer_app.command()
def render(
    template: Path = typer.Argument(..., help="Template file to render."),
    data_file: Optional[Path] = typer.Option(
        None, "-d", "--data", help="YAML or JSON file with template data."
    ),
    assignments: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Top-level value as key=value (repeatable)."
    ),
    layout: Optional[Path] = typer.Option(
        None, "-l", "--layout", help="Layout template wrapping the output."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to pdpug.yaml."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write HTML to file instead of stdout."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render TEMPLATE with data and print the HTML."""
    setup_logging(verbose)

    try:
        config = load_config(config_file) if config_file else EngineConfig()

        data: dict[str, Any] = load_data(data_file) if data_file else {}
        data.update(parse_assignments(assignments))

        env = Environment(config)
        if layout is not None or config.layout is not None:
            html = env.render_page(template, data, layout=layout, layout_data=data)
        else:
            html = env.render(template, data)

    except (PdpugError, FileNotFoundError) as exc:
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        log.info(f"Wrote {len(html)} characters to {output}")
    else:
        typer.echo(html, nl=False)


def app() -> None:
    """Entry point for the installed `pdpug` script."""
    typer_app()


if __name__ == "__main__":
    app()
