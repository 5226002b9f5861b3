"""Diff subsystem for captured value trees."""

from lanepack.diff.engine import compare, diff_objects, diff_values
from lanepack.diff.formatting import NO_DIFFERENCES, render_diff_report
from lanepack.diff.models import DiffReport

__all__ = [
    "DiffReport",
    "NO_DIFFERENCES",
    "compare",
    "diff_objects",
    "diff_values",
    "render_diff_report",
]
