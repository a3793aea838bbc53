"""Operator control panel: one independent SlotController per slot."""
from typing import Optional

import httpx

from fabcast.client.api_client import OverlayApiClient
from fabcast.client.slot_controller import SlotController
from fabcast.config import BASE_URL
from fabcast.models.overlay import Slot


class ControlPanel:
    """Player 1 and Player 2 share only the API client, never state."""

    def __init__(self, api: OverlayApiClient) -> None:
        self.api = api
        self._slots = {slot: SlotController(slot, api) for slot in Slot}

    @classmethod
    def connect(
        cls,
        base_url: str = BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ControlPanel":
        return cls(OverlayApiClient(base_url, transport=transport))

    def slot(self, slot: Slot | str) -> SlotController:
        resolved = slot if isinstance(slot, Slot) else Slot.parse(slot)
        return self._slots[resolved]

    @property
    def player1(self) -> SlotController:
        return self._slots[Slot.PLAYER1]

    @property
    def player2(self) -> SlotController:
        return self._slots[Slot.PLAYER2]

    async def aclose(self) -> None:
        for controller in self._slots.values():
            controller.close()
        await self.api.aclose()

    async def __aenter__(self) -> "ControlPanel":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
