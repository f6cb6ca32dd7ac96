"""Shared utilities for validation, filtering and display."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from .const import BUS_TYPES, DEFAULT_BUS_TYPE
from .exceptions import ValidationError
from .models import Bus

INVALID_DATE_TEXT = "Invalid Date"


def parse_iso_date(value: str) -> date:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date must be a non-empty string.")
    raw = value.strip()
    # Accept full timestamps too; only the calendar day is kept.
    if "T" in raw:
        raw = raw.split("T", 1)[0]
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Date is not a valid ISO 8601 value.") from exc


def ensure_iso_date(value: str) -> str:
    return parse_iso_date(value).isoformat()


def format_display_date(value: str) -> str:
    """Render an ISO date in the current locale's date format."""
    try:
        parsed = parse_iso_date(value)
    except ValidationError:
        return INVALID_DATE_TEXT
    return parsed.strftime("%x")


def normalize_bus_type(value: str | None) -> str:
    if value is None:
        return DEFAULT_BUS_TYPE
    if not isinstance(value, str):
        raise ValidationError("Bus type must be a string.")
    stripped = value.strip()
    for bus_type in BUS_TYPES:
        if bus_type.lower() == stripped.lower():
            return bus_type
    raise ValidationError(f"Bus type must be one of: {', '.join(BUS_TYPES)}.")


def matches_search(bus: Bus, term: str) -> bool:
    needle = term.lower()
    return needle in bus.bus_number.lower() or needle in bus.type.lower()


def filter_buses(buses: Iterable[Bus], term: str) -> list[Bus]:
    return [bus for bus in buses if matches_search(bus, term)]
