import json

from busroster.models import Bus, BusDraft, RosterState


def test_roster_state_serializes() -> None:
    bus = Bus(
        id=1,
        bus_number="B1",
        type="Express",
        capacity=40,
        last_maintenance="2024-01-01",
        next_maintenance="2024-06-01",
    )
    state = RosterState(buses=(bus,), editing_bus=bus, is_edit_dialog_open=True)

    data = state.to_dict()

    assert data["buses"][0]["id"] == 1
    assert data["editing_bus"]["bus_number"] == "B1"
    assert data["new_bus"] == {
        "bus_number": "",
        "type": "Express",
        "capacity": 40,
        "last_maintenance": "",
        "next_maintenance": "",
    }
    json.dumps(data)


def test_bus_to_draft_drops_id() -> None:
    bus = Bus(
        id=3,
        bus_number="B3",
        type="Sleeper",
        capacity=30,
        last_maintenance="2024-01-01",
        next_maintenance="2024-06-01",
    )
    assert bus.to_draft() == BusDraft(
        bus_number="B3",
        type="Sleeper",
        capacity=30,
        last_maintenance="2024-01-01",
        next_maintenance="2024-06-01",
    )
