from __future__ import annotations

import pytest

from busroster.models import Bus, BusDraft, RosterState
from busroster.reducer import (
    AddDialogToggled,
    BusCreated,
    BusDeleted,
    BusUpdated,
    EditStarted,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    NewBusEdited,
    OperationFailed,
    SearchChanged,
    reduce,
)


def _bus(bus_id: int, capacity: int = 40) -> Bus:
    return Bus(
        id=bus_id,
        bus_number=f"B{bus_id}",
        type="Express",
        capacity=capacity,
        last_maintenance="2024-01-01",
        next_maintenance="2024-06-01",
    )


def test_load_cycle() -> None:
    state = reduce(RosterState(error="old"), LoadStarted())
    assert state.loading is True
    state = reduce(state, LoadSucceeded((_bus(1),)))
    assert state.loading is False
    assert state.error is None
    assert state.buses == (_bus(1),)


def test_load_failed_keeps_buses() -> None:
    state = reduce(RosterState(buses=(_bus(1),), loading=True), LoadFailed("nope"))
    assert state.buses == (_bus(1),)
    assert state.error == "nope"
    assert state.load_failed is True
    state = reduce(state, LoadSucceeded(()))
    assert state.load_failed is False
    assert state.error is None
    assert state.loading is False


def test_bus_created_appends_and_resets_form() -> None:
    state = RosterState(
        buses=(_bus(1),),
        is_add_dialog_open=True,
        new_bus=BusDraft(bus_number="B2"),
    )
    state = reduce(state, BusCreated(_bus(2)))
    assert state.buses == (_bus(1), _bus(2))
    assert state.is_add_dialog_open is False
    assert state.new_bus == BusDraft()


def test_bus_updated_replaces_by_id() -> None:
    state = reduce(RosterState(buses=(_bus(1), _bus(2))), EditStarted(_bus(2)))
    state = reduce(state, BusUpdated(_bus(2, capacity=12)))
    assert state.buses == (_bus(1), _bus(2, capacity=12))
    assert state.editing_bus is None
    assert state.is_edit_dialog_open is False


def test_bus_updated_for_other_id_keeps_edit_form() -> None:
    state = reduce(RosterState(buses=(_bus(1), _bus(2))), EditStarted(_bus(1)))
    state = reduce(state, BusUpdated(_bus(2, capacity=12)))
    assert state.buses == (_bus(1), _bus(2, capacity=12))
    assert state.editing_bus == _bus(1)
    assert state.is_edit_dialog_open is True


def test_bus_updated_for_missing_id_does_not_add() -> None:
    state = reduce(RosterState(buses=(_bus(1),)), BusUpdated(_bus(5)))
    assert state.buses == (_bus(1),)


def test_bus_deleted_removes_only_match() -> None:
    state = reduce(RosterState(buses=(_bus(1), _bus(2), _bus(3))), BusDeleted(2))
    assert [bus.id for bus in state.buses] == [1, 3]
    state = reduce(state, BusDeleted(99))
    assert [bus.id for bus in state.buses] == [1, 3]


def test_operation_failed_keeps_forms() -> None:
    state = RosterState(is_add_dialog_open=True, new_bus=BusDraft(bus_number="X"))
    state = reduce(state, OperationFailed("failed"))
    assert state.error == "failed"
    assert state.load_failed is False
    assert state.is_add_dialog_open is True
    assert state.new_bus.bus_number == "X"


def test_form_actions() -> None:
    state = reduce(RosterState(), AddDialogToggled(True))
    state = reduce(state, NewBusEdited(BusDraft(bus_number="N1")))
    state = reduce(state, SearchChanged("exp"))
    assert state.is_add_dialog_open is True
    assert state.new_bus.bus_number == "N1"
    assert state.search_term == "exp"


def test_reducer_does_not_mutate_input() -> None:
    original = RosterState(buses=(_bus(1),))
    reduce(original, BusDeleted(1))
    assert original.buses == (_bus(1),)


def test_unknown_action() -> None:
    with pytest.raises(TypeError):
        reduce(RosterState(), object())  # type: ignore[arg-type]
