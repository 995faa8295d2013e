from __future__ import annotations

from typing import Optional


class ProjectionError(Exception):
    """Base class for errors raised by the projection engine."""


class InvalidConfigurationError(ProjectionError, ValueError):
    """A configuration was rejected before any simulation work started."""

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        self.message = message
        prefix = f"{field}: " if field else ""
        super().__init__(f"Invalid configuration: {prefix}{message}")


class SamplingError(ProjectionError, RuntimeError):
    """The uniform random source is broken (persistent zeros or out-of-range values)."""
