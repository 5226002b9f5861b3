"""Two-pass capture of arbitrary value graphs into JSON-compatible trees."""

from __future__ import annotations

from collections.abc import Collection, Iterator, Mapping, Sequence, Set
import enum
import logging
import numbers
from typing import Any

from lanepack.capture.byteseq import is_byte_sequence, render_byte_run
from lanepack.capture.registry import AddressRegistry, AddressState
from lanepack.capture.text import (
    describe_handle,
    is_callable_reference,
    is_handle,
    is_textual_value,
    qualified_name,
    render_complex,
    render_float,
    render_textual_value,
)
from lanepack.core.canonical import stable_sort_key, to_json
from lanepack.core.exceptions import UnsupportedKindError
from lanepack.core.types import (
    ADDRESS_NOTE_KEY,
    ADDRESS_NOTE_PREFIX,
    BACK_REFERENCE_FORMAT,
    CapturedValue,
)

_log = logging.getLogger("lanepack.capture")

_LEAF = "leaf"
_MAPPING = "mapping"
_NAMEDTUPLE = "namedtuple"
_SET = "set"
_SEQUENCE = "sequence"
_OBJECT = "object"
_COLLECTION = "collection"
_UNSUPPORTED = "unsupported"

# Immutable containers can't close a cycle by themselves, and interned
# singletons such as () would otherwise look aliased.
_UNTRACKED_TYPES = (tuple, frozenset, range)

_EXHAUSTED = object()


def capture(value: Any) -> CapturedValue:
    """Convert ``value`` into a JSON-compatible tree.

    Private attributes are included and references are followed. Nodes that
    are reachable more than once are rendered in full the first time and as
    ``"(pointer: 0x...)"`` afterwards. Only Object renderings carry the
    ``""`` address note, so a back reference to a shared list or set names
    an address that appears nowhere else in the output.

    Both passes walk an explicit stack, so nesting depth is not bounded by
    the interpreter recursion limit.
    """
    registry: AddressRegistry | None = AddressRegistry()
    if survey_addresses(value, registry):
        _log.debug("aliasing detected: %d shared references", registry.confirmed_count)
    else:
        registry = None
    return _render(value, registry)


def capture_json(value: Any, *, pretty: bool = False) -> str:
    """Capture ``value`` and encode the result as canonical JSON."""
    return to_json(capture(value), pretty=pretty)


def survey_addresses(value: Any, registry: AddressRegistry) -> bool:
    """First pass: mark every node reachable more than once.

    Returns True when any aliasing was found. Descent stops at the second
    visit of a node, which is what bounds the walk on cyclic graphs. Nodes
    are visited in the same depth-first order the render pass uses.
    """
    aliased = False
    pending = [value]
    while pending:
        current = pending.pop()
        kind = _classify(current)
        if kind in (_LEAF, _UNSUPPORTED):
            continue
        if _is_tracked(current) and registry.visit(current):
            aliased = True
            continue
        children = list(_children(current, kind))
        children.reverse()
        pending.extend(children)
    return aliased


class _RenderFrame:
    """A container being filled while its children are rendered."""

    __slots__ = ("kind", "address", "children", "names", "result", "key")

    def __init__(self, value: Any, kind: str, address: int | None) -> None:
        self.kind = kind
        self.address = address
        self.names: Iterator[str] | None = None
        self.key: str | None = None
        if kind == _MAPPING:
            self.children = _children(value, kind)
            self.result = {}
        elif kind == _NAMEDTUPLE:
            self.names = iter(value._fields)
            self.children = iter(value)
            self.result = {}
        elif kind == _OBJECT:
            fields = _object_fields(value)
            self.names = iter([name for name, _ in fields])
            self.children = iter([item for _, item in fields])
            self.result = {}
        else:
            self.children = iter(value)
            self.result = []

    def accept(self, rendered: CapturedValue) -> None:
        if self.kind == _MAPPING:
            # children alternate key, value
            if self.key is None:
                self.key = _key_text(rendered)
            else:
                self.result[self.key] = rendered
                self.key = None
        elif self.names is not None:
            self.result[next(self.names)] = rendered
        else:
            self.result.append(rendered)

    def finish(self) -> CapturedValue:
        if self.kind == _SET:
            self.result.sort(key=stable_sort_key)
        if self.address is not None and isinstance(self.result, dict):
            self.result[ADDRESS_NOTE_KEY] = f"{ADDRESS_NOTE_PREFIX}{self.address:#x}"
        return self.result


def _render(value: Any, registry: AddressRegistry | None) -> CapturedValue:
    """Second pass: build the output tree depth-first, children in order."""
    rendered, frame = _open(value, registry)
    if frame is None:
        return rendered

    stack = [frame]
    while True:
        top = stack[-1]
        child = next(top.children, _EXHAUSTED)
        if child is _EXHAUSTED:
            stack.pop()
            finished = top.finish()
            if not stack:
                return finished
            stack[-1].accept(finished)
            continue
        rendered, frame = _open(child, registry)
        if frame is None:
            top.accept(rendered)
        else:
            stack.append(frame)


def _open(
    value: Any,
    registry: AddressRegistry | None,
) -> tuple[CapturedValue, _RenderFrame | None]:
    """Render a leaf or back reference directly, or start a container frame."""
    kind = _classify(value)
    if kind == _LEAF:
        return _render_leaf(value), None
    if kind == _UNSUPPORTED:
        raise UnsupportedKindError(type(value))

    address: int | None = None
    if registry is not None and _is_tracked(value):
        state = registry.state_of(value)
        if state is AddressState.RENDERED:
            return BACK_REFERENCE_FORMAT.format(address=id(value)), None
        if state is AddressState.CONFIRMED:
            registry.mark_rendered(value)
            address = id(value)
    return None, _RenderFrame(value, kind, address)


def _render_leaf(value: Any) -> CapturedValue:
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return f"{type(value).__qualname__}.{value.name}"
    if isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return render_float(value)
    if isinstance(value, complex):
        return render_complex(value)
    if is_byte_sequence(value):
        return render_byte_run(value)
    if is_textual_value(value):
        return render_textual_value(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return render_float(float(value))
    if isinstance(value, numbers.Complex):
        return render_complex(complex(value))
    if is_handle(value):
        return describe_handle(value)
    if is_callable_reference(value):
        return qualified_name(value)
    raise UnsupportedKindError(type(value))


def _classify(value: Any) -> str:
    if (
        value is None
        or isinstance(value, (enum.Enum, numbers.Number, str))
        or is_byte_sequence(value)
        or is_textual_value(value)
        or is_handle(value)
        or is_callable_reference(value)
    ):
        return _LEAF
    if isinstance(value, Mapping):
        return _MAPPING
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return _NAMEDTUPLE
    if isinstance(value, Set):
        return _SET
    if isinstance(value, Sequence):
        return _SEQUENCE
    if _has_fields(value):
        return _OBJECT
    if isinstance(value, Collection):
        return _COLLECTION
    return _UNSUPPORTED


def _is_tracked(value: Any) -> bool:
    return not isinstance(value, _UNTRACKED_TYPES)


def _children(value: Any, kind: str) -> Iterator[Any]:
    if kind == _MAPPING:
        for key, item in value.items():
            yield key
            yield item
    elif kind == _OBJECT:
        for _, item in _object_fields(value):
            yield item
    else:
        yield from value


def _key_text(rendered_key: CapturedValue) -> str:
    if isinstance(rendered_key, str):
        return rendered_key
    return to_json(rendered_key)


def _has_fields(value: Any) -> bool:
    value_type = type(value)
    if value_type is object or value_type.__dictoffset__:
        return True
    return any("__slots__" in vars(cls) for cls in value_type.__mro__[:-1])


def _object_fields(value: Any) -> list[tuple[str, Any]]:
    """Read every stored attribute, bypassing properties and ``__getattr__``."""
    fields: dict[str, Any] = {}
    value_type = type(value)
    for cls in reversed(value_type.__mro__):
        for name in _slot_names(cls):
            descriptor = vars(cls).get(name)
            if descriptor is None:
                continue
            try:
                fields[name] = descriptor.__get__(value, value_type)
            except AttributeError:
                # unset slot
                continue

    try:
        instance_dict = object.__getattribute__(value, "__dict__")
    except AttributeError:
        instance_dict = {}
    for name, item in instance_dict.items():
        fields[str(name)] = item
    return list(fields.items())


def _slot_names(cls: type) -> Iterator[str]:
    slots = vars(cls).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        if name.startswith("__") and not name.endswith("__"):
            name = f"_{cls.__name__.lstrip('_')}{name}"
        yield name
