"""Public data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .const import DEFAULT_BUS_TYPE, DEFAULT_CAPACITY


@dataclass(frozen=True, slots=True)
class BusDraft:
    bus_number: str = ""
    type: str = DEFAULT_BUS_TYPE
    capacity: int = DEFAULT_CAPACITY
    last_maintenance: str = ""
    next_maintenance: str = ""


@dataclass(frozen=True, slots=True)
class Bus:
    id: int
    bus_number: str
    type: str
    capacity: int
    last_maintenance: str
    next_maintenance: str

    def to_draft(self) -> BusDraft:
        return BusDraft(
            bus_number=self.bus_number,
            type=self.type,
            capacity=self.capacity,
            last_maintenance=self.last_maintenance,
            next_maintenance=self.next_maintenance,
        )


@dataclass(frozen=True, slots=True)
class RosterState:
    """Everything the bus screen renders from.

    ``buses`` is the canonical list. It is only replaced or patched through
    :func:`busroster.reducer.reduce`. ``load_failed`` marks an ``error`` that
    came from fetching the list rather than from a mutation.
    """

    buses: tuple[Bus, ...] = ()
    search_term: str = ""
    is_add_dialog_open: bool = False
    is_edit_dialog_open: bool = False
    loading: bool = False
    error: str | None = None
    load_failed: bool = False
    new_bus: BusDraft = field(default_factory=BusDraft)
    editing_bus: Bus | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["buses"] = list(data["buses"])
        return data
