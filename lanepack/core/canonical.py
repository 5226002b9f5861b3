"""Canonical JSON encoding and kind detection for captured values."""

from __future__ import annotations

import json
from typing import Any

from lanepack.core.exceptions import MarshalError
from lanepack.core.types import CapturedValue, ValueKind


def to_json(value: CapturedValue, *, pretty: bool = False) -> str:
    """Serialize a captured value to stable JSON.

    Object keys are sorted, separators are compact and non-ASCII text is
    kept as-is. Non-finite floats are rejected; the capture engine never
    emits them.
    """
    try:
        if pretty:
            return json.dumps(
                value,
                ensure_ascii=False,
                sort_keys=True,
                indent=2,
                allow_nan=False,
            )
        return json.dumps(
            value,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as error:
        raise MarshalError(f"captured value is not JSON encodable: {error}") from error


def kind_of(value: Any) -> ValueKind:
    """Return the captured-value kind name of ``value``.

    Raises ``TypeError`` for values that are not part of a captured tree.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"not a captured value: {type(value).__name__}")


def stable_sort_key(item: CapturedValue) -> str:
    return to_json(item)
