"""Runtime configuration for object logging and CLI output."""

from __future__ import annotations

from dataclasses import dataclass
import os

MAX_LENGTH_ENV_VAR = "LANEKIT_MAX_LENGTH"
PRETTY_JSON_ENV_VAR = "LANEKIT_PRETTY_JSON"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class LaneConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass(slots=True)
class LaneConfig:
    """Settings shared by ``ObjectLogger`` and the CLI.

    ``max_length`` limits the length of each object log message; values of 1
    or less disable the limit.
    """

    max_length: int = 0
    pretty_json: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            raise LaneConfigError("max_length must be an integer")
        if self.max_length <= 1:
            self.max_length = 0

    @classmethod
    def from_env(cls) -> "LaneConfig":
        return cls(
            max_length=_resolve_max_length(),
            pretty_json=_resolve_pretty_json(),
        )


def _resolve_max_length() -> int:
    raw = os.environ.get(MAX_LENGTH_ENV_VAR)
    if raw is None:
        return 0
    try:
        parsed = int(raw.strip())
    except ValueError:
        return 0
    return max(0, parsed)


def _resolve_pretty_json() -> bool:
    raw = os.environ.get(PRETTY_JSON_ENV_VAR)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUE_VALUES
