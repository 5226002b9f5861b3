"""Data model for structural diff reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lanepack.core.types import CapturedValue


@dataclass(slots=True)
class DiffReport:
    """Captured sides of a comparison and the change tokens between them."""

    left: CapturedValue
    right: CapturedValue
    changes: str

    @property
    def identical(self) -> bool:
        return self.changes == ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "changes": self.changes,
            "left": self.left,
            "right": self.right,
        }
