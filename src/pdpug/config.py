"""Configuration parsing for pdpug.yaml and template data files.

Schema:
- max_include_depth: deepest @include nesting before rendering fails
- template_dir: directory template names are resolved against
- layout: default layout template wrapping every rendered page
- content_key: variable the rendered page is bound to inside the layout
- extension: suffix appended to template names given without one
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from pdpug.exceptions import ConfigError


class EngineConfig(BaseModel):
    """Engine and environment settings."""

    max_include_depth: int = Field(
        default=20, ge=0, description="Maximum nesting depth of @include"
    )
    template_dir: Path | None = Field(
        default=None, description="Base directory for template names"
    )
    layout: str | None = Field(
        default=None, description="Default layout template for render_page"
    )
    content_key: str = Field(
        default="content", description="Layout variable holding the page HTML"
    )
    extension: str = Field(
        default=".pdpug", description="Suffix added to names without one"
    )


def load_config(path: Path) -> EngineConfig:
    """Load pdpug.yaml from path."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _load_yaml_mapping(path)

    try:
        config = EngineConfig(**data)
    except ValidationError as e:
        raise ConfigError(str(path), str(e)) from e

    # Relative template_dir is relative to the config file
    if config.template_dir is not None and not config.template_dir.is_absolute():
        config.template_dir = path.parent / config.template_dir

    return config


def load_data(path: Path) -> dict[str, Any]:
    """Load template data from a YAML or JSON file.

    JSON is valid YAML, so both go through the same loader.
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    return _load_yaml_mapping(path)


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(str(path), str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    return data
