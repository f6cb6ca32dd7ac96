"""Plain text rendering of the roster state."""

from __future__ import annotations

from .models import Bus, RosterState
from .util import filter_buses, format_display_date

TITLE = "Bus Management"
COLUMNS = ("Bus Number", "Type", "Capacity", "Last Maintenance", "Next Maintenance")
SKELETON_ROWS = 5
SKELETON_CELL = "..."


def bus_row(bus: Bus) -> tuple[str, ...]:
    return (
        bus.bus_number,
        bus.type,
        str(bus.capacity),
        format_display_date(bus.last_maintenance),
        format_display_date(bus.next_maintenance),
    )


def format_table(rows: list[tuple[str, ...]]) -> list[str]:
    table = [COLUMNS, *rows]
    widths = [max(len(row[index]) for row in table) for index in range(len(COLUMNS))]
    return [
        " | ".join(cell.ljust(widths[index]) for index, cell in enumerate(row)).rstrip()
        for row in table
    ]


def render(state: RosterState) -> list[str]:
    """Return the screen for ``state`` as lines of text.

    A loading state shows placeholder rows. A failed fetch replaces the
    screen; a failed mutation is shown above the table.
    """
    if state.loading:
        skeleton = [(SKELETON_CELL,) * len(COLUMNS)] * SKELETON_ROWS
        return [TITLE, *format_table(skeleton)]
    if state.error and state.load_failed:
        return [f"Error: {state.error}"]
    lines = [f"Error: {state.error}"] if state.error else []
    lines.append(TITLE)
    if state.search_term:
        lines.append(f"Search: {state.search_term}")
    rows = [bus_row(bus) for bus in filter_buses(state.buses, state.search_term)]
    lines.extend(format_table(rows))
    return lines
