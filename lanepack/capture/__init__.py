"""Capture subsystem: arbitrary values to JSON-compatible trees."""

from lanepack.capture.byteseq import LARGE_BYTE_RUN, render_byte_run
from lanepack.capture.engine import capture, capture_json, survey_addresses
from lanepack.capture.registry import AddressRegistry, AddressState
from lanepack.core.exceptions import CaptureError, MarshalError, UnsupportedKindError

__all__ = [
    "CaptureError",
    "UnsupportedKindError",
    "MarshalError",
    "AddressRegistry",
    "AddressState",
    "LARGE_BYTE_RUN",
    "capture",
    "capture_json",
    "render_byte_run",
    "survey_addresses",
]
