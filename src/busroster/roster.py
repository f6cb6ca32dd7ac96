"""Bus roster controller: the canonical list plus the four API operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any

from .api import BusApi
from .const import (
    CREATE_FAILED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    FETCH_FAILED_MESSAGE,
    UPDATE_FAILED_MESSAGE,
)
from .exceptions import BusRosterError, ValidationError
from .models import Bus, BusDraft, RosterState
from .reducer import (
    Action,
    AddDialogToggled,
    BusCreated,
    BusDeleted,
    BusUpdated,
    EditDialogToggled,
    EditingBusEdited,
    EditStarted,
    ErrorDismissed,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    NewBusEdited,
    OperationFailed,
    SearchChanged,
    reduce,
)
from .util import filter_buses

_LOGGER = logging.getLogger(__name__)


class BusRoster:
    """Holds the roster state and mediates create/update/delete calls.

    Failures never propagate out of the async operations: they are logged and
    turned into a single message on :attr:`state` ``.error``. Mutations that
    target the same bus id run one after another.
    """

    def __init__(self, api: BusApi, state: RosterState | None = None) -> None:
        self._api = api
        self._state = state or RosterState()
        self._record_locks: dict[int, asyncio.Lock] = {}
        self._record_lock_users: dict[int, int] = {}

    @property
    def state(self) -> RosterState:
        return self._state

    @property
    def buses(self) -> tuple[Bus, ...]:
        return self._state.buses

    @property
    def visible_buses(self) -> list[Bus]:
        return filter_buses(self._state.buses, self._state.search_term)

    def dispatch(self, action: Action) -> RosterState:
        self._state = reduce(self._state, action)
        return self._state

    async def load(self) -> None:
        """Replace the whole list with the server's copy."""
        self.dispatch(LoadStarted())
        try:
            buses = await self._api.list_buses()
        except BusRosterError:
            _LOGGER.warning("Error fetching buses", exc_info=True)
            self.dispatch(LoadFailed(FETCH_FAILED_MESSAGE))
            return
        self.dispatch(LoadSucceeded(tuple(buses)))

    async def create(self, draft: BusDraft | None = None) -> Bus | None:
        """Create a bus from ``draft`` or from the add form."""
        if draft is not None:
            self.dispatch(NewBusEdited(draft))
        draft = self._state.new_bus
        try:
            created = await self._api.create_bus(draft)
        except BusRosterError:
            _LOGGER.warning("Error adding bus", exc_info=True)
            self.dispatch(OperationFailed(CREATE_FAILED_MESSAGE))
            return None
        self.dispatch(BusCreated(created))
        return created

    async def update(self, record: Bus | None = None) -> Bus | None:
        """Submit ``record`` or the bus in the edit form as a whole.

        An explicit ``record`` is sent as is and leaves the edit form alone,
        unless the form holds the same bus and the update succeeds.
        """
        if record is None:
            record = self._state.editing_bus
        if record is None:
            return None
        async with self._record_lock(record.id):
            try:
                updated = await self._api.update_bus(record)
            except BusRosterError:
                _LOGGER.warning("Error updating bus %s", record.id, exc_info=True)
                self.dispatch(OperationFailed(UPDATE_FAILED_MESSAGE))
                return None
            self.dispatch(BusUpdated(updated))
        return updated

    async def delete(self, bus_id: int) -> bool:
        async with self._record_lock(bus_id):
            try:
                await self._api.delete_bus(bus_id)
            except BusRosterError:
                _LOGGER.warning("Error deleting bus %s", bus_id, exc_info=True)
                self.dispatch(OperationFailed(DELETE_FAILED_MESSAGE))
                return False
            self.dispatch(BusDeleted(bus_id))
        return True

    def filter(self, term: str) -> list[Bus]:
        """Set the search term and return the matching buses."""
        self.dispatch(SearchChanged(term))
        return self.visible_buses

    def open_add_dialog(self) -> None:
        self.dispatch(AddDialogToggled(True))

    def close_add_dialog(self) -> None:
        self.dispatch(AddDialogToggled(False))

    def set_new_bus(self, **fields: Any) -> BusDraft:
        draft = replace(self._state.new_bus, **fields)
        self.dispatch(NewBusEdited(draft))
        return draft

    def start_edit(self, bus_id: int) -> Bus:
        for bus in self._state.buses:
            if bus.id == bus_id:
                self.dispatch(EditStarted(bus))
                return bus
        raise ValidationError("Bus id was not found.")

    def set_editing_bus(self, **fields: Any) -> Bus:
        if self._state.editing_bus is None:
            raise ValidationError("No bus is being edited.")
        if "id" in fields:
            raise ValidationError("Bus id cannot be changed.")
        bus = replace(self._state.editing_bus, **fields)
        self.dispatch(EditingBusEdited(bus))
        return bus

    def close_edit_dialog(self) -> None:
        self.dispatch(EditDialogToggled(False))

    def dismiss_error(self) -> None:
        self.dispatch(ErrorDismissed())

    @asynccontextmanager
    async def _record_lock(self, bus_id: int) -> AsyncIterator[None]:
        lock = self._record_locks.get(bus_id)
        if lock is None:
            lock = asyncio.Lock()
            self._record_locks[bus_id] = lock
        self._record_lock_users[bus_id] = self._record_lock_users.get(bus_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            # Drop the lock once no caller holds it or waits on it.
            remaining = self._record_lock_users[bus_id] - 1
            if remaining:
                self._record_lock_users[bus_id] = remaining
            else:
                del self._record_lock_users[bus_id]
                del self._record_locks[bus_id]
