"""Object logging on top of the standard ``logging`` module.

``log_object`` captures a value, encodes it as canonical JSON and writes
``"<message>: <json>"`` at the requested level. ``ObjectLogger`` wraps a
logger with per-level ``*_object`` helpers and a message length limit.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from lanepack.capture import capture_json
from lanepack.config import LaneConfig

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ELLIPSIS = "…"

_LEVELS_BY_NAME = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

LoggerLike = logging.Logger | logging.LoggerAdapter


def resolve_level(level: int | str) -> int:
    """Map a level number or name (``"trace"``, ``"warn"``, ...) to a level number."""
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    if isinstance(level, str):
        resolved = _LEVELS_BY_NAME.get(level.strip().lower())
        if resolved is not None:
            return resolved
    raise ValueError("invalid level argument")


def constrain(text: str, max_length: int | None) -> str:
    """Truncate ``text`` to ``max_length`` characters, ending with an ellipsis."""
    if max_length is not None and max_length > 1 and len(text) > max_length:
        return text[: max_length - 1] + ELLIPSIS
    return text


def format_object_message(message: str, obj: Any) -> str:
    return f"{message}: {capture_json(obj)}"


def log_object(
    logger: LoggerLike,
    level: int | str,
    message: str,
    obj: Any,
    *,
    max_length: int | None = None,
    stacklevel: int = 1,
) -> None:
    """Log the full captured state of ``obj``.

    Nothing is captured when ``logger`` is not enabled for ``level``.
    Capture and encoding errors propagate to the caller.
    """
    levelno = resolve_level(level)
    if not logger.isEnabledFor(levelno):
        return
    text = constrain(format_object_message(message, obj), max_length)
    logger.log(levelno, "%s", text, stacklevel=stacklevel + 1)


class ObjectLogger(logging.LoggerAdapter):
    """Logger adapter adding ``*_object`` methods and a length constraint."""

    def __init__(
        self,
        logger: logging.Logger,
        extra: dict[str, Any] | None = None,
        *,
        config: LaneConfig | None = None,
    ) -> None:
        super().__init__(logger, extra or {})
        self.config = dataclasses.replace(config) if config is not None else LaneConfig()

    def set_length_constraint(self, max_length: int) -> int:
        """Set the message length limit (1 or less disables it); return the old one."""
        previous = self.config.max_length
        self.config.max_length = max_length if max_length > 1 else 0
        return previous

    def constrain(self, text: str) -> str:
        return constrain(text, self.config.max_length)

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 2)
        self.log(TRACE, msg, *args, **kwargs)

    def log_object(self, level: int | str, message: str, obj: Any) -> None:
        log_object(self, level, message, obj, max_length=self.config.max_length, stacklevel=2)

    def trace_object(self, message: str, obj: Any) -> None:
        log_object(self, TRACE, message, obj, max_length=self.config.max_length, stacklevel=2)

    def debug_object(self, message: str, obj: Any) -> None:
        log_object(
            self, logging.DEBUG, message, obj, max_length=self.config.max_length, stacklevel=2
        )

    def info_object(self, message: str, obj: Any) -> None:
        log_object(
            self, logging.INFO, message, obj, max_length=self.config.max_length, stacklevel=2
        )

    def warn_object(self, message: str, obj: Any) -> None:
        log_object(
            self, logging.WARNING, message, obj, max_length=self.config.max_length, stacklevel=2
        )

    def error_object(self, message: str, obj: Any) -> None:
        log_object(
            self, logging.ERROR, message, obj, max_length=self.config.max_length, stacklevel=2
        )

    def fatal_object(self, message: str, obj: Any) -> None:
        log_object(
            self, logging.CRITICAL, message, obj, max_length=self.config.max_length, stacklevel=2
        )


def get_object_logger(name: str, config: LaneConfig | None = None) -> ObjectLogger:
    """Return an ``ObjectLogger`` for ``name``, configured from the environment by default."""
    return ObjectLogger(
        logging.getLogger(name),
        config=config if config is not None else LaneConfig.from_env(),
    )
