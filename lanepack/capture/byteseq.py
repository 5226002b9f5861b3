"""Rendering rules for byte sequences."""

from __future__ import annotations

import array
import base64
from typing import Any

from lanepack.core.types import CapturedValue

LARGE_BYTE_RUN = 1000

_PRINTABLE = bytes(range(32, 127)) + b"\n\r\t"


def is_byte_sequence(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return True
    return isinstance(value, array.array) and value.typecode == "B"


def render_byte_run(value: bytes | bytearray | memoryview | array.array) -> CapturedValue:
    """Render a byte sequence as text, base64 or a list of numbers.

    Printable ASCII (plus newline, carriage return and tab) becomes a plain
    string. Anything else becomes base64 once it reaches ``LARGE_BYTE_RUN``
    bytes and a list of ints below that.
    """
    data = value.tobytes() if isinstance(value, (memoryview, array.array)) else bytes(value)
    if not data:
        return []
    if not data.translate(None, _PRINTABLE):
        return data.decode("ascii")
    if len(data) >= LARGE_BYTE_RUN:
        return base64.b64encode(data).decode("ascii")
    return list(data)
