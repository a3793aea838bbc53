"""Async client for the relay and lookup endpoints; failures come back as values, never raised."""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from fabcast.models.overlay import Slot

logger = logging.getLogger(__name__)

LOOKUP_NETWORK_ERROR = "Network error: could not reach the server. Try again."
PUBLISH_NETWORK_ERROR = "Network error: could not update the overlay. Try again."
CLEAR_NETWORK_ERROR = "Network error: could not clear the overlay. Try again."
POLL_NETWORK_ERROR = "Cannot reach the server. Check your connection."


@dataclass(frozen=True)
class ApiResult:
    """Decoded envelope. Check success before trusting data."""
    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "ApiResult":
        return cls(success=False, data=None, error=error)


class OverlayApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_sec: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_sec,
            transport=transport,
        )

    async def _request(self, method: str, path: str, network_error: str, **kwargs) -> ApiResult:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            return ApiResult.failure(network_error)
        try:
            body = resp.json()
        except ValueError:
            logger.debug("%s %s returned non-JSON (%s)", method, path, resp.status_code)
            return ApiResult.failure(network_error)
        if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
            return ApiResult.failure(network_error)
        if body["success"]:
            return ApiResult(success=True, data=body.get("data"))
        return ApiResult.failure(str(body.get("error") or "Request failed."))

    async def lookup_player(self, player_id: str) -> ApiResult:
        return await self._request(
            "GET", "/api/player-lookup", LOOKUP_NETWORK_ERROR, params={"id": player_id}
        )

    async def read_overlay(self, slot: Slot) -> ApiResult:
        return await self._request(
            "GET", "/api/overlay-state", POLL_NETWORK_ERROR, params={"slot": slot.value}
        )

    async def write_overlay(
        self,
        slot: Slot,
        state: dict[str, Any],
        network_error: str = PUBLISH_NETWORK_ERROR,
    ) -> ApiResult:
        return await self._request(
            "POST", "/api/overlay-state", network_error, params={"slot": slot.value}, json=state
        )

    async def aclose(self) -> None:
        await self._client.aclose()
