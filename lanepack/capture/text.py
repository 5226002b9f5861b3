"""Textual renderings for scalar and opaque values."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
import functools
import math
from pathlib import PurePath
import queue
import threading
import types
from typing import Any
from uuid import UUID

from lanepack.core.types import NAN_TEXT, NEGATIVE_INFINITY_TEXT, POSITIVE_INFINITY_TEXT

_ISO_TYPES = (datetime, date, time)
_STR_TYPES = (timedelta, Decimal, Fraction, UUID, PurePath)

_CALLABLE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ModuleType,
    functools.partial,
    type,
)

_GENERATOR_TYPES = (
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
)

_HANDLE_TYPES = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    type(threading.Lock()),
    type(threading.RLock()),
) + _GENERATOR_TYPES

_GENERATOR_KIND_NAMES = {
    types.GeneratorType: "generator",
    types.CoroutineType: "coroutine",
    types.AsyncGeneratorType: "async_generator",
}


def render_float(value: float) -> float | str:
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT
    return value


def render_complex(value: complex) -> str:
    """Render ``value`` as ``(re+imi)``, e.g. ``(1+0i)`` or ``(10+0.3i)``."""
    real = _float_text(value.real)
    imag = _float_text(value.imag)
    if not imag.startswith(("+", "-")):
        imag = f"+{imag}"
    return f"({real}{imag}i)"


def _float_text(value: float) -> str:
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def is_textual_value(value: Any) -> bool:
    return isinstance(value, _ISO_TYPES + _STR_TYPES)


def render_textual_value(value: Any) -> str:
    if isinstance(value, _ISO_TYPES):
        return value.isoformat()
    return str(value)


def is_callable_reference(value: Any) -> bool:
    return isinstance(value, _CALLABLE_TYPES)


def qualified_name(value: Any) -> str:
    """Return ``module.qualname`` for functions, methods, partials and classes.

    Modules render as their dotted name.
    """
    if isinstance(value, types.ModuleType):
        return value.__name__
    if isinstance(value, functools.partial):
        return f"functools.partial({qualified_name(value.func)})"
    target = getattr(value, "__func__", value)
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name is None:
        name = type(target).__qualname__
    if module is None:
        owner = getattr(target, "__objclass__", None)
        module = getattr(owner, "__module__", None) or "builtins"
    return f"{module}.{name}"


def is_handle(value: Any) -> bool:
    return isinstance(value, _HANDLE_TYPES) or isinstance(value, Iterator)


def describe_handle(value: Any) -> str:
    """Describe a queue, lock, iterator or generator without consuming it."""
    for handle_type, kind_name in _GENERATOR_KIND_NAMES.items():
        if isinstance(value, handle_type):
            return f"{kind_name} {value.__qualname__}"
    value_type = type(value)
    return f"{value_type.__module__}.{value_type.__qualname__}"
