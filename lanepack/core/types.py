"""Type definitions for captured value trees."""

from typing import Any, Literal, Union

ValueKind = Literal[
    "null",
    "bool",
    "number",
    "string",
    "array",
    "object",
]

VALUE_KINDS: tuple[str, ...] = (
    "null",
    "bool",
    "number",
    "string",
    "array",
    "object",
)

CapturedValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]

ADDRESS_NOTE_KEY = ""
ADDRESS_NOTE_PREFIX = "Address: "
BACK_REFERENCE_FORMAT = "(pointer: {address:#x})"

POSITIVE_INFINITY_TEXT = "+Inf"
NEGATIVE_INFINITY_TEXT = "-Inf"
NAN_TEXT = "NaN"
