"""Single-pass structural diff over captured value trees."""

from __future__ import annotations

from typing import Any

from lanepack.capture import capture
from lanepack.core.canonical import kind_of, to_json
from lanepack.core.types import CapturedValue
from lanepack.diff import formatting
from lanepack.diff.models import DiffReport


def diff_objects(left: Any, right: Any) -> str:
    """Describe the differences between two arbitrary values.

    Both sides are captured first. An empty string means no difference.
    """
    return diff_values(capture(left), capture(right))


def compare(left: Any, right: Any) -> DiffReport:
    """Capture both sides and return a structured report."""
    left_value = capture(left)
    right_value = capture(right)
    return DiffReport(
        left=left_value,
        right=right_value,
        changes=diff_values(left_value, right_value),
    )


def diff_values(left: CapturedValue, right: CapturedValue) -> str:
    """Diff two captured trees into bracketed change tokens."""
    if left is None:
        if right is None:
            return ""
        return formatting.nil_to(right)
    if right is None:
        return formatting.to_nil(left)

    left_kind = kind_of(left)
    right_kind = kind_of(right)
    if left_kind != right_kind:
        return formatting.type_change(left_kind, right_kind, left, right)

    if left_kind == "object":
        return _diff_map(left, right)

    if left_kind == "array":
        return _diff_array(left, right)

    if left == right:
        return ""

    if left_kind == "number":
        return formatting.number_change(left, right)
    if left_kind == "string":
        return formatting.string_change(left, right)
    return formatting.bool_change(left, right)


def _diff_map(left: dict[str, CapturedValue], right: dict[str, CapturedValue]) -> str:
    parts: list[str] = []
    for key in sorted(set(left.keys()) | set(right.keys())):
        if key not in left:
            parts.append(formatting.new_key(key, right[key]))
        elif key not in right:
            parts.append(formatting.delete_key(key, left[key]))
        elif diff_values(left[key], right[key]):
            parts.append(formatting.key_change(key, left[key], right[key]))
    return "".join(parts)


def _diff_array(left: list[CapturedValue], right: list[CapturedValue]) -> str:
    """Greedy two-cursor alignment with one element of lookahead.

    Elements are equal when their canonical JSON is identical or when the
    scalar comparator finds no difference (``1`` and ``1.0``). On mismatch
    the order is: insertion lookahead, deletion lookahead, replacement.
    """
    left_text = [to_json(item) for item in left]
    right_text = [to_json(item) for item in right]

    def same(left_index: int, right_index: int) -> bool:
        if left_text[left_index] == right_text[right_index]:
            return True
        return not diff_values(left[left_index], right[right_index])

    parts: list[str] = []
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        if same(i, j):
            i += 1
            j += 1
        elif j + 1 < len(right) and same(i, j + 1):
            parts.append(formatting.insert_at(j, right_text[j]))
            j += 1
        elif i + 1 < len(left) and same(i + 1, j):
            parts.append(formatting.remove_at(i, left_text[i]))
            i += 1
        else:
            parts.append(formatting.replace_at(j, diff_values(left[i], right[j])))
            i += 1
            j += 1

    while i < len(left):
        parts.append(formatting.remove_at(i, left_text[i]))
        i += 1

    while j < len(right):
        parts.append(formatting.append_at(j, right_text[j]))
        j += 1

    return "".join(parts)
