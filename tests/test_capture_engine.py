from collections import namedtuple
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
import enum
import functools
import json
from pathlib import PurePosixPath
import queue
import threading
from uuid import UUID

import pytest

from lanepack.capture import UnsupportedKindError, capture, capture_json


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


class Account:
    def __init__(self) -> None:
        self.owner = "ann"
        self._balance = 10
        self.__pin = 1234

    @property
    def balance(self) -> int:
        return self._balance

    def deposit(self, amount: int) -> None:
        self._balance += amount


class Point:
    __slots__ = ("x", "y", "__tag")

    def __init__(self) -> None:
        self.x = 1
        self.y = 2
        self.__tag = "p"


class Sparse:
    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = "set"


class Opaque:
    def __init__(self) -> None:
        self.visible = True

    def __getattr__(self, name: str) -> object:
        raise RuntimeError(f"lookup of {name} must not happen")


@dataclass
class Settings:
    name: str
    retries: int = 3
    _secret: str = field(default="s", repr=False)


@dataclass(frozen=True)
class Pair:
    a: int
    b: int


Span = namedtuple("Span", ["start", "end"])


def sample_function(value: int) -> int:
    return value


def count_up():
    yield 1


def test_scalars_capture_as_themselves() -> None:
    assert capture(None) is None
    assert capture(True) is True
    assert capture(-64) == -64
    assert capture(64.64) == 64.64
    assert capture("hello") == "hello"


def test_non_finite_floats_capture_as_text() -> None:
    assert capture(float("inf")) == "+Inf"
    assert capture(float("-inf")) == "-Inf"
    assert capture(float("nan")) == "NaN"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (complex(64, 0.64), "(64+0.64i)"),
        (complex(128, 0.128), "(128+0.128i)"),
        (complex(1, 0), "(1+0i)"),
        (complex(10, 0.3), "(10+0.3i)"),
        (complex(1, -2), "(1-2i)"),
    ],
)
def test_complex_numbers_capture_as_text(value: complex, expected: str) -> None:
    assert capture(value) == expected


def test_enum_members_capture_as_qualified_member_names() -> None:
    assert capture(Color.RED) == "Color.RED"
    assert capture(Priority.HIGH) == "Priority.HIGH"


def test_textual_values_use_their_string_forms() -> None:
    assert capture(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05"
    assert capture(date(2026, 1, 2)) == "2026-01-02"
    assert capture(Decimal("1.50")) == "1.50"
    assert capture(PurePosixPath("var/log")) == "var/log"
    uuid = UUID("12345678-1234-5678-1234-567812345678")
    assert capture(uuid) == "12345678-1234-5678-1234-567812345678"


def test_callables_capture_as_qualified_names() -> None:
    module = sample_function.__module__

    assert capture(sample_function) == f"{module}.sample_function"
    assert capture(Account().deposit) == f"{module}.Account.deposit"
    assert capture(Account) == f"{module}.Account"
    assert capture(len) == "builtins.len"
    assert capture(json) == "json"
    assert capture(functools.partial(sample_function, 1)) == (
        f"functools.partial({module}.sample_function)"
    )


def test_handles_capture_as_descriptions() -> None:
    assert capture(queue.Queue()) == "queue.Queue"
    assert capture(count_up()) == "generator count_up"
    assert capture(iter([1, 2])) == "builtins.list_iterator"
    assert capture(threading.Lock()) == "_thread.lock"


def test_capturing_a_generator_does_not_consume_it() -> None:
    generator = count_up()
    capture(generator)
    assert next(generator) == 1


def test_objects_include_private_and_mangled_attributes() -> None:
    assert capture(Account()) == {
        "owner": "ann",
        "_balance": 10,
        "_Account__pin": 1234,
    }


def test_slotted_objects_capture_set_slots_only() -> None:
    assert capture(Point()) == {"x": 1, "y": 2, "_Point__tag": "p"}
    assert capture(Sparse()) == {"a": "set"}


def test_object_capture_bypasses_getattr_hooks() -> None:
    assert capture(Opaque()) == {"visible": True}


def test_dataclasses_capture_every_field() -> None:
    assert capture(Settings(name="svc")) == {"name": "svc", "retries": 3, "_secret": "s"}


def test_bare_object_captures_as_empty_object() -> None:
    assert capture(object()) == {}


def test_namedtuple_captures_as_object() -> None:
    assert capture(Span(1, 5)) == {"start": 1, "end": 5}


def test_sequences_capture_as_arrays() -> None:
    assert capture(["cat", "dog"]) == ["cat", "dog"]
    assert capture(("cat", "dog")) == ["cat", "dog"]
    assert capture(range(3)) == [0, 1, 2]
    assert capture((0, 0)) == [0, 0]


def test_sets_capture_sorted_by_canonical_json() -> None:
    assert capture({"cow", "ant", "bee"}) == ["ant", "bee", "cow"]
    assert capture(frozenset({3, 1, 2})) == [1, 2, 3]


def test_map_keys_are_stringified() -> None:
    value = {1: "one", 2.5: "float", (1, 2): "pair", None: "nil", "name": "str"}

    assert capture(value) == {
        "1": "one",
        "2.5": "float",
        "[1,2]": "pair",
        "null": "nil",
        "name": "str",
    }


def test_object_map_keys_use_their_captured_json() -> None:
    value = {Pair(10, 20): 1, Pair(20, 30): 2}

    assert capture_json(value) == '{"{\\"a\\":10,\\"b\\":20}":1,"{\\"a\\":20,\\"b\\":30}":2}'


def test_map_values_are_captured() -> None:
    value = {1: Pair(10, 20), 2: Pair(20, 30)}

    assert capture_json(value) == '{"1":{"a":10,"b":20},"2":{"a":20,"b":30}}'


def test_composite_values_capture_recursively() -> None:
    value = {
        "array": (0, 0),
        "fn": sample_function,
        "queue": queue.Queue(),
        "slice": [],
    }

    assert capture(value) == {
        "array": [0, 0],
        "fn": f"{sample_function.__module__}.sample_function",
        "queue": "queue.Queue",
        "slice": [],
    }


def test_capture_json_is_compact_with_sorted_keys() -> None:
    assert capture_json({"b": 1, "a": [True, None]}) == '{"a":[true,null],"b":1}'


def test_capture_json_pretty_output_is_indented() -> None:
    assert capture_json({"a": 1}, pretty=True) == '{\n  "a": 1\n}'


def test_unsupported_values_raise() -> None:
    with pytest.raises(UnsupportedKindError) as error:
        capture(slice(1, 2))

    assert error.value.value_type is slice
    assert "builtins.slice" in str(error.value)


def test_unsupported_values_nested_in_containers_raise() -> None:
    with pytest.raises(UnsupportedKindError):
        capture({"ok": 1, "bad": [slice(1, 2)]})
