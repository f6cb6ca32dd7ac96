"""HTTP client for the bus REST resource."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .const import BUSES_ENDPOINT, DEFAULT_BUS_TYPE, DEFAULT_CAPACITY, DEFAULT_HEADERS
from .exceptions import ApiError, NetworkError, ValidationError
from .models import Bus, BusDraft
from .util import ensure_iso_date, normalize_bus_type

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)
_BUS_FIELDS = ("id", "bus_number", "type", "capacity", "last_maintenance", "next_maintenance")


class BusApi:
    """Thin client for ``/api/buses``."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    @property
    def base_url(self) -> str | None:
        return self._base_url

    async def list_buses(self) -> list[Bus]:
        """Return every bus known to the server."""
        _LOGGER.debug("list_buses started")
        data = await self._request_json("GET", BUSES_ENDPOINT)
        buses = self._map_bus_list(data)
        _LOGGER.debug("list_buses completed count=%s", len(buses))
        return buses

    async def create_bus(self, draft: BusDraft) -> Bus:
        """Create a bus and return the server's canonical record."""
        _LOGGER.debug("create_bus started")
        payload = self._build_draft_payload(draft)
        data = await self._request_json("POST", BUSES_ENDPOINT, json=payload)
        bus = self._map_bus(data)
        _LOGGER.debug("create_bus completed id=%s", bus.id)
        return bus

    async def update_bus(self, bus: Bus) -> Bus:
        """Submit a full bus record and return the updated record."""
        bus_id = self._require_id(bus.id, "id")
        _LOGGER.debug("update_bus started id=%s", bus_id)
        payload = {"id": bus_id, **self._build_draft_payload(bus.to_draft())}
        data = await self._request_json("PUT", BUSES_ENDPOINT, json=payload)
        updated = self._map_bus(data)
        _LOGGER.debug("update_bus completed id=%s", updated.id)
        return updated

    async def delete_bus(self, bus_id: int) -> None:
        """Delete a bus by id. The response body is ignored."""
        bus_id_value = self._require_id(bus_id, "id")
        _LOGGER.debug("delete_bus started id=%s", bus_id_value)
        await self._request_text("DELETE", BUSES_ENDPOINT, json={"id": bus_id_value})
        _LOGGER.debug("delete_bus completed id=%s", bus_id_value)

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        return await self._request(method, url, expect_json=True, **kwargs)

    async def _request_text(self, method: str, path: str, **kwargs: Any) -> str:
        url = self._build_url(path)
        return await self._request(method, url, expect_json=False, **kwargs)

    async def _request(self, method: str, url: str, *, expect_json: bool, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    headers=DEFAULT_HEADERS,
                    timeout=self._timeout,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    if expect_json:
                        try:
                            return await response.json()
                        except (aiohttp.ContentTypeError, ValueError) as exc:
                            raise ApiError(
                                "Response did not contain valid JSON.",
                                status=response.status,
                            ) from exc
                    return await response.text()
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.debug("%s %s failed, retrying (attempt %s)", method, url, attempt + 1)

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        raise ApiError(
            f"Bus API request failed with status {response.status}.",
            status=response.status,
        )

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"

    def _build_draft_payload(self, draft: BusDraft) -> dict[str, Any]:
        if not isinstance(draft.bus_number, str) or not draft.bus_number.strip():
            raise ValidationError("bus_number is required.")
        bus_type = normalize_bus_type(draft.type or DEFAULT_BUS_TYPE)
        capacity = DEFAULT_CAPACITY if draft.capacity is None else draft.capacity
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise ValidationError("capacity must be a non-negative integer.")
        return {
            "bus_number": draft.bus_number,
            "type": bus_type,
            "capacity": capacity,
            "last_maintenance": ensure_iso_date(draft.last_maintenance),
            "next_maintenance": ensure_iso_date(draft.next_maintenance),
        }

    def _require_id(self, value: Any, field: str) -> int:
        if value is None or isinstance(value, bool):
            raise ValidationError(f"{field} is required.")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"{field} must be an integer.") from exc

    def _map_bus_list(self, data: Any) -> list[Bus]:
        if not isinstance(data, list):
            raise ApiError("Bus API response must be a list.")
        return [self._map_bus(item) for item in data]

    def _map_bus(self, data: Any) -> Bus:
        if not isinstance(data, dict):
            raise ApiError("Bus API response included invalid bus data.")
        missing = [key for key in _BUS_FIELDS if key not in data]
        if missing:
            raise ApiError(f"Bus API response missing keys: {', '.join(missing)}.")
        return Bus(
            id=self._coerce_response_int(data["id"], "id"),
            bus_number=self._coerce_response_text(data["bus_number"]),
            type=self._coerce_response_text(data["type"]),
            capacity=self._coerce_response_int(data["capacity"], "capacity"),
            last_maintenance=self._coerce_response_text(data["last_maintenance"]),
            next_maintenance=self._coerce_response_text(data["next_maintenance"]),
        )

    def _coerce_response_int(self, value: Any, field: str) -> int:
        if value is None or isinstance(value, bool):
            raise ApiError(f"Bus API response missing {field}.")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ApiError(f"Bus API response included invalid {field}.") from exc

    def _coerce_response_text(self, value: Any) -> str:
        if value is None:
            return ""
        return str(value)
