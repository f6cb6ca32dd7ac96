"""Pure state transitions for the bus roster.

Every change to :class:`~busroster.models.RosterState` goes through
:func:`reduce`, so list reconciliation can be checked without any rendering
or network code.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .models import Bus, BusDraft, RosterState


@dataclass(frozen=True, slots=True)
class LoadStarted:
    pass


@dataclass(frozen=True, slots=True)
class LoadSucceeded:
    buses: tuple[Bus, ...]


@dataclass(frozen=True, slots=True)
class LoadFailed:
    message: str


@dataclass(frozen=True, slots=True)
class BusCreated:
    bus: Bus


@dataclass(frozen=True, slots=True)
class BusUpdated:
    bus: Bus


@dataclass(frozen=True, slots=True)
class BusDeleted:
    bus_id: int


@dataclass(frozen=True, slots=True)
class OperationFailed:
    message: str


@dataclass(frozen=True, slots=True)
class SearchChanged:
    term: str


@dataclass(frozen=True, slots=True)
class AddDialogToggled:
    is_open: bool


@dataclass(frozen=True, slots=True)
class NewBusEdited:
    draft: BusDraft


@dataclass(frozen=True, slots=True)
class EditStarted:
    bus: Bus


@dataclass(frozen=True, slots=True)
class EditingBusEdited:
    bus: Bus


@dataclass(frozen=True, slots=True)
class EditDialogToggled:
    is_open: bool


@dataclass(frozen=True, slots=True)
class ErrorDismissed:
    pass


Action = (
    LoadStarted
    | LoadSucceeded
    | LoadFailed
    | BusCreated
    | BusUpdated
    | BusDeleted
    | OperationFailed
    | SearchChanged
    | AddDialogToggled
    | NewBusEdited
    | EditStarted
    | EditingBusEdited
    | EditDialogToggled
    | ErrorDismissed
)


def reduce(state: RosterState, action: Action) -> RosterState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, LoadStarted):
        return replace(state, loading=True)
    if isinstance(action, LoadSucceeded):
        return replace(
            state,
            buses=tuple(action.buses),
            loading=False,
            error=None,
            load_failed=False,
        )
    if isinstance(action, LoadFailed):
        return replace(state, loading=False, error=action.message, load_failed=True)
    if isinstance(action, BusCreated):
        return replace(
            state,
            buses=(*state.buses, action.bus),
            is_add_dialog_open=False,
            new_bus=BusDraft(),
        )
    if isinstance(action, BusUpdated):
        # An id missing from the list (e.g. deleted meanwhile) leaves it as is.
        buses = tuple(action.bus if bus.id == action.bus.id else bus for bus in state.buses)
        editing = state.editing_bus
        if editing is None or editing.id != action.bus.id:
            return replace(state, buses=buses)
        return replace(state, buses=buses, is_edit_dialog_open=False, editing_bus=None)
    if isinstance(action, BusDeleted):
        buses = tuple(bus for bus in state.buses if bus.id != action.bus_id)
        return replace(state, buses=buses)
    if isinstance(action, OperationFailed):
        return replace(state, error=action.message, load_failed=False)
    if isinstance(action, SearchChanged):
        return replace(state, search_term=action.term)
    if isinstance(action, AddDialogToggled):
        return replace(state, is_add_dialog_open=action.is_open)
    if isinstance(action, NewBusEdited):
        return replace(state, new_bus=action.draft)
    if isinstance(action, EditStarted):
        return replace(state, editing_bus=action.bus, is_edit_dialog_open=True)
    if isinstance(action, EditingBusEdited):
        return replace(state, editing_bus=action.bus)
    if isinstance(action, EditDialogToggled):
        return replace(state, is_edit_dialog_open=action.is_open)
    if isinstance(action, ErrorDismissed):
        return replace(state, error=None, load_failed=False)
    raise TypeError(f"Unsupported action: {type(action).__name__}")
