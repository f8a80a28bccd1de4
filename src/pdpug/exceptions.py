"""PDpug Exceptions

Errors raised while loading, expanding or rendering templates.
Every one of them aborts the render call; no partial output is returned.
"""

from __future__ import annotations


class PdpugError(Exception):
    """Base exception for all pdpug errors."""

    pass


class TemplateNotFound(PdpugError):
    """Raised when the template path does not name a readable file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Template not found: {path}")


class TemplateReadError(PdpugError):
    """Raised when a template exists but cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not read template: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IncludeNotFound(PdpugError):
    """Raised when an @include target does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Include not found: {path}")


class IncludeCycle(PdpugError):
    """Raised when an @include target is already on the inclusion chain."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Include cycle detected: {path}")


class TooManyIncludes(PdpugError):
    """Raised when nested includes go deeper than the configured limit."""

    def __init__(self, depth: int, limit: int = 20):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Too many nested includes (depth {depth}, limit {limit})")


class ConfigError(PdpugError):
    """Raised when a config or data file is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid file {path}: {reason}")
