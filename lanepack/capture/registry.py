"""Per-call identity registry used to break cycles during capture."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class AddressState(IntEnum):
    UNSEEN = 0
    POSSIBLE = 1
    CONFIRMED = 2
    RENDERED = 3


@dataclass(slots=True)
class AddressRegistry:
    """Identity states for a single ``capture`` call.

    The survey pass promotes ``UNSEEN -> POSSIBLE -> CONFIRMED``. The render
    pass then flips ``CONFIRMED -> RENDERED`` on the first full rendering so
    that every later visit becomes a back reference.

    Visited objects are held until the registry is dropped so their ``id()``
    can't be reused by a temporary created later in the same call.
    """

    states: dict[int, AddressState] = field(default_factory=dict)
    _anchors: list[Any] = field(default_factory=list, repr=False)

    def visit(self, value: Any) -> bool:
        """Record a survey visit; return True when ``value`` was seen before."""
        address = id(value)
        state = self.states.get(address, AddressState.UNSEEN)
        if state is AddressState.UNSEEN:
            self.states[address] = AddressState.POSSIBLE
            self._anchors.append(value)
            return False
        if state is AddressState.POSSIBLE:
            self.states[address] = AddressState.CONFIRMED
        return True

    def state_of(self, value: Any) -> AddressState:
        return self.states.get(id(value), AddressState.UNSEEN)

    def mark_rendered(self, value: Any) -> None:
        self.states[id(value)] = AddressState.RENDERED

    @property
    def confirmed_count(self) -> int:
        return sum(1 for state in self.states.values() if state >= AddressState.CONFIRMED)
