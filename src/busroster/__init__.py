"""busroster package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .api import BusApi
from .client import Client
from .exceptions import ApiError, BusRosterError, NetworkError, ValidationError
from .models import Bus, BusDraft, RosterState
from .roster import BusRoster

try:
    __version__ = version("busroster")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "Bus",
    "BusApi",
    "BusDraft",
    "BusRoster",
    "BusRosterError",
    "Client",
    "NetworkError",
    "RosterState",
    "ValidationError",
    "__version__",
]
