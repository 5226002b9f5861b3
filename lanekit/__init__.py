"""Stable public API surface for lanekit.

This module is the supported import path for library users.
"""

from __future__ import annotations

import logging
from typing import Any

from lanepack import __version__
from lanepack.capture import CaptureError, MarshalError, UnsupportedKindError
from lanepack.capture import capture as _capture
from lanepack.capture import capture_json as _capture_json
from lanepack.config import LaneConfig
from lanepack.core.types import CapturedValue
from lanepack.diff import DiffReport
from lanepack.diff import compare as _compare
from lanepack.diff import diff_objects as _diff_objects
from lanepack.diff import diff_values as _diff_values
from lanepack.lane import TRACE, ObjectLogger, get_object_logger
from lanepack.lane import log_object as _log_object


def capture(value: Any) -> CapturedValue:
    """Capture any value as a JSON-compatible tree.

    Args:
        value: Object graph to capture. Private attributes are included and
            cycles are broken with ``"(pointer: 0x...)"`` back references.

    Returns:
        ``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` or ``dict``.

    Raises:
        UnsupportedKindError: If the graph contains a value of an unsupported type.
    """
    return _capture(value)


def capture_json(value: Any, *, pretty: bool = False) -> str:
    """Capture a value and encode it as canonical JSON.

    Args:
        value: Object graph to capture.
        pretty: Indent the output instead of using compact separators.

    Returns:
        JSON text with sorted object keys.
    """
    return _capture_json(value, pretty=pretty)


def diff_values(left: CapturedValue, right: CapturedValue) -> str:
    """Diff two already captured trees.

    Returns:
        Concatenated change tokens, or ``""`` when there is no difference.
    """
    return _diff_values(left, right)


def diff_objects(left: Any, right: Any) -> str:
    """Capture two values and describe their differences.

    Returns:
        Concatenated change tokens, or ``""`` when there is no difference.
    """
    return _diff_objects(left, right)


def compare(left: Any, right: Any) -> DiffReport:
    """Capture two values and return both trees with the change tokens."""
    return _compare(left, right)


def log_object(
    logger: logging.Logger | logging.LoggerAdapter,
    level: int | str,
    message: str,
    obj: Any,
    *,
    max_length: int | None = None,
) -> None:
    """Log ``"<message>: <captured json>"`` at ``level``.

    Args:
        logger: Standard logger or adapter to write to.
        level: Level number or name (``"trace"``, ``"debug"``, ``"info"``,
            ``"warn"``, ``"error"``, ``"fatal"``).
        message: Text placed before the captured JSON.
        obj: Value to capture.
        max_length: Optional message length limit; longer text ends with ``"…"``.

    Raises:
        ValueError: If ``level`` is not a known level.
    """
    _log_object(logger, level, message, obj, max_length=max_length, stacklevel=2)


__all__ = [
    "__version__",
    "CapturedValue",
    "DiffReport",
    "LaneConfig",
    "ObjectLogger",
    "TRACE",
    "CaptureError",
    "UnsupportedKindError",
    "MarshalError",
    "capture",
    "capture_json",
    "diff_values",
    "diff_objects",
    "compare",
    "log_object",
    "get_object_logger",
]
