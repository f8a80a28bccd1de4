"""PDpug - a minimal indentation-based HTML template engine inspired by Pug.

Supported:
- Structure by indentation (2 spaces per level)
- Directives: @include, @if/@else, @foreach
- Interpolation: #{var} (escaped) and !{var} (raw)
- Attributes in parentheses: tag(attr="val")
- Shorthands for id (#id) and classes (.class)
"""

from pdpug._version import __version__
from pdpug.config import EngineConfig, load_config, load_data
from pdpug.environment import Environment
from pdpug.exceptions import (
    ConfigError,
    IncludeCycle,
    IncludeNotFound,
    PdpugError,
    TemplateNotFound,
    TemplateReadError,
    TooManyIncludes,
)
from pdpug.renderer import Renderer, render, render_string

__all__ = [
    "__version__",
    "ConfigError",
    "EngineConfig",
    "Environment",
    "IncludeCycle",
    "IncludeNotFound",
    "PdpugError",
    "Renderer",
    "TemplateNotFound",
    "TemplateReadError",
    "TooManyIncludes",
    "load_config",
    "load_data",
    "render",
    "render_string",
]
