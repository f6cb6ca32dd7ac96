from datetime import date

from busroster.const import DELETE_FAILED_MESSAGE, FETCH_FAILED_MESSAGE
from busroster.models import Bus, RosterState
from busroster.view import COLUMNS, SKELETON_CELL, SKELETON_ROWS, TITLE, render


def _bus(bus_id: int, bus_number: str, bus_type: str) -> Bus:
    return Bus(
        id=bus_id,
        bus_number=bus_number,
        type=bus_type,
        capacity=40,
        last_maintenance="2024-01-01",
        next_maintenance="2024-06-01",
    )


def test_render_loading_shows_skeleton() -> None:
    lines = render(RosterState(loading=True, buses=(_bus(1, "B1", "Express"),)))
    assert lines[0] == TITLE
    assert len(lines) == 2 + SKELETON_ROWS
    assert all(SKELETON_CELL in line for line in lines[2:])
    assert "B1" not in "\n".join(lines)


def test_render_fetch_failure_replaces_screen() -> None:
    state = RosterState(
        buses=(_bus(1, "B1", "Express"),),
        error=FETCH_FAILED_MESSAGE,
        load_failed=True,
    )
    assert render(state) == [f"Error: {FETCH_FAILED_MESSAGE}"]


def test_render_mutation_failure_keeps_table() -> None:
    state = RosterState(
        buses=(_bus(1, "B1", "Express"), _bus(2, "B2", "Deluxe")),
        error=DELETE_FAILED_MESSAGE,
    )

    lines = render(state)

    assert lines[0] == f"Error: {DELETE_FAILED_MESSAGE}"
    assert lines[1] == TITLE
    assert len(lines) == 5
    assert lines[3].startswith("B1")
    assert lines[4].startswith("B2")


def test_render_empty_list() -> None:
    lines = render(RosterState())
    assert lines[0] == TITLE
    assert len(lines) == 2
    for column in COLUMNS:
        assert column in lines[1]


def test_render_filters_and_formats_dates() -> None:
    state = RosterState(
        buses=(_bus(1, "B1", "Express"), _bus(2, "D2", "Deluxe")),
        search_term="deluxe",
    )
    lines = render(state)
    assert lines[1] == "Search: deluxe"
    assert len(lines) == 4
    assert lines[3].startswith("D2")
    assert date(2024, 6, 1).strftime("%x") in lines[3]
