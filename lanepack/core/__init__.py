"""Captured value kinds and canonical encoding."""

from lanepack.core.canonical import kind_of, stable_sort_key, to_json
from lanepack.core.exceptions import CaptureError, MarshalError, UnsupportedKindError
from lanepack.core.types import VALUE_KINDS, CapturedValue, ValueKind

__all__ = [
    "CapturedValue",
    "CaptureError",
    "MarshalError",
    "UnsupportedKindError",
    "VALUE_KINDS",
    "ValueKind",
    "kind_of",
    "stable_sort_key",
    "to_json",
]
