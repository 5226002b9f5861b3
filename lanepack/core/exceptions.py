"""Exceptions raised while capturing and encoding values."""

from __future__ import annotations


class CaptureError(Exception):
    """Base class for capture subsystem errors."""


class UnsupportedKindError(CaptureError):
    """Raised when a value's type is not covered by the capture dispatch table."""

    def __init__(self, value_type: type) -> None:
        self.value_type = value_type
        name = f"{value_type.__module__}.{value_type.__qualname__}"
        super().__init__(f"can't capture value of type {name}")


class MarshalError(CaptureError, ValueError):
    """Raised when a captured value can't be encoded as JSON."""
