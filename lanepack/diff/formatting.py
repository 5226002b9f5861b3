"""Change tokens emitted by the diff engine, and report rendering."""

from __future__ import annotations

from lanepack.core.canonical import to_json
from lanepack.core.types import CapturedValue
from lanepack.diff.models import DiffReport

NO_DIFFERENCES = "no differences"


def nil_to(right: CapturedValue) -> str:
    return f"[nil to {to_json(right)}]"


def to_nil(left: CapturedValue) -> str:
    return f"[{to_json(left)} to nil]"


def type_change(
    left_kind: str,
    right_kind: str,
    left: CapturedValue,
    right: CapturedValue,
) -> str:
    return f"[type change {left_kind} to {right_kind}: was {to_json(left)}, is {to_json(right)}]"


def number_change(left: int | float, right: int | float) -> str:
    # floats use fixed six-digit precision, ints stay integral
    if isinstance(left, float) or isinstance(right, float):
        return f"[{left:f}->{right:f}]"
    return f"[{left}->{right}]"


def string_change(left: str, right: str) -> str:
    return f'["{left}"->"{right}"]'


def bool_change(left: bool, right: bool) -> str:
    return f"[{_bool_text(left)}->{_bool_text(right)}]"


def new_key(key: str, right: CapturedValue) -> str:
    return f'[new key "{key}": {to_json(right)}]'


def delete_key(key: str, left: CapturedValue) -> str:
    return f'[delete key "{key}" was {to_json(left)}]'


def key_change(key: str, left: CapturedValue, right: CapturedValue) -> str:
    return f"[{key}: {to_json(left)} -> {to_json(right)}]"


def insert_at(index: int, rendered: str) -> str:
    return f"[insert[{index}]: {rendered}]"


def remove_at(index: int, rendered: str) -> str:
    return f"[remove[{index}]: {rendered}]"


def append_at(index: int, rendered: str) -> str:
    return f"[append[{index}]: {rendered}]"


def replace_at(index: int, change: str) -> str:
    return f"[replace[{index}]: {change}]"


def render_diff_report(report: DiffReport) -> str:
    if report.identical:
        return NO_DIFFERENCES
    return report.changes


def _bool_text(value: bool) -> str:
    return "true" if value else "false"
