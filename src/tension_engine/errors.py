"""Exception types raised by the tension engine."""

from __future__ import annotations

from typing import Any


class TensionEngineError(Exception):
    """Base class for every error raised by this package."""


class ColorValidationError(TensionEngineError, ValueError):
    """A color-engine argument was out of range or malformed.

    Raised before any output is produced, so callers never see a partial
    color value.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason}, received: {value!r}")


class ConfigurationError(TensionEngineError, ValueError):
    """Invalid analyzer configuration supplied at construction time."""


class ContextStateError(TensionEngineError, RuntimeError):
    """A context was used in a way its lifecycle does not allow."""


class ContextClosedError(ContextStateError):
    """The context has been torn down."""
