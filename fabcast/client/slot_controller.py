"""Operator-side state machine for one slot: lookup -> review -> publish -> clear.

Lookup and send (publish/clear) each have their own ActionState, so a second
request for an action that is RUNNING is refused instead of being sent twice.
Results that arrive after close() are dropped.
"""
import asyncio
import logging
from enum import Enum
from typing import Optional

from fabcast.client.api_client import CLEAR_NETWORK_ERROR, PUBLISH_NETWORK_ERROR, OverlayApiClient
from fabcast.config import FADE_OUT_SEC, SEND_SUCCESS_DISPLAY_SEC
from fabcast.models.overlay import OverlayState, Slot
from fabcast.models.player import PlayerRecord

logger = logging.getLogger(__name__)


class ActionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SlotController:
    def __init__(
        self,
        slot: Slot,
        api: OverlayApiClient,
        success_display_sec: float = SEND_SUCCESS_DISPLAY_SEC,
        fade_out_sec: float = FADE_OUT_SEC,
    ) -> None:
        self.slot = slot
        self._api = api
        self._success_display_sec = success_display_sec
        self._fade_out_sec = fade_out_sec

        self.gem_id = ""
        self.looked_up: Optional[PlayerRecord] = None
        self.lookup_state = ActionState.IDLE
        self.lookup_error: Optional[str] = None

        # What this operator last put on air for the slot
        self.live_player: Optional[PlayerRecord] = None
        self.live_visible = False
        self.send_state = ActionState.IDLE
        self.send_error: Optional[str] = None
        self.send_success = False

        self._success_timer: Optional[asyncio.TimerHandle] = None
        self._fade_timer: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def can_lookup(self) -> bool:
        return (
            not self._closed
            and bool(self.gem_id.strip())
            and self.lookup_state is not ActionState.RUNNING
        )

    @property
    def can_publish(self) -> bool:
        return (
            not self._closed
            and self.looked_up is not None
            and self.send_state is not ActionState.RUNNING
        )

    @property
    def can_clear(self) -> bool:
        return (
            not self._closed
            and self.live_visible
            and self.live_player is not None
            and self.send_state is not ActionState.RUNNING
        )

    def adopt(self, state: OverlayState) -> None:
        """Take over what is already on air (e.g. published from another operator process)."""
        # Whatever is on air now supersedes a fade still pending from our own clear
        self._cancel(self._fade_timer)
        self._fade_timer = None
        self.live_player = state.player
        self.live_visible = state.visible and state.player is not None

    async def submit(self, gem_id: Optional[str] = None) -> bool:
        """Look up the typed GEM ID. Returns False when the action is not enabled."""
        if gem_id is not None:
            self.gem_id = gem_id
        if not self.can_lookup:
            return False
        player_id = self.gem_id.strip()
        self.lookup_state = ActionState.RUNNING
        self.lookup_error = None
        self.looked_up = None
        try:
            result = await self._api.lookup_player(player_id)
            if self._closed:
                return True
            record = PlayerRecord.from_dict(result.data) if result.success else None
            if record is not None:
                self.looked_up = record
                self.lookup_state = ActionState.SUCCEEDED
            else:
                self.lookup_error = result.error or "Unexpected response from the server."
                self.lookup_state = ActionState.FAILED
        finally:
            if self.lookup_state is ActionState.RUNNING:
                self.lookup_state = ActionState.IDLE
        return True

    async def publish(self) -> bool:
        """Put the looked-up player on air (visible)."""
        if not self.can_publish:
            return False
        record = self.looked_up
        self._begin_send()
        self.send_success = False
        self._cancel(self._success_timer)
        try:
            result = await self._api.write_overlay(
                self.slot,
                OverlayState(player=record, visible=True).to_dict(),
                network_error=PUBLISH_NETWORK_ERROR,
            )
            if self._closed:
                return True
            if result.success:
                # A pending fade from an earlier clear must not drop this record
                self._cancel(self._fade_timer)
                self.live_player = record
                self.live_visible = True
                self.send_success = True
                self.send_state = ActionState.SUCCEEDED
                self._success_timer = self._later(self._success_display_sec, self._reset_success)
                logger.info("%s live: %s", self.slot.label, record.name)
            else:
                self.send_error = result.error
                self.send_state = ActionState.FAILED
        finally:
            self._end_send()
        return True

    async def clear(self) -> bool:
        """Hide the graphic; the record is kept through the fade, then dropped."""
        if not self.can_clear:
            return False
        record = self.live_player
        self._begin_send()
        try:
            result = await self._api.write_overlay(
                self.slot,
                OverlayState(player=record, visible=False).to_dict(),
                network_error=CLEAR_NETWORK_ERROR,
            )
            if self._closed:
                return True
            if result.success:
                self.live_visible = False
                self.send_state = ActionState.SUCCEEDED
                self._fade_timer = self._later(self._fade_out_sec, self._drop_live_player)
                logger.info("%s cleared", self.slot.label)
            else:
                self.send_error = result.error
                self.send_state = ActionState.FAILED
        finally:
            self._end_send()
        return True

    def close(self) -> None:
        """Cancel pending timers and ignore late results. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._cancel(self._success_timer)
        self._cancel(self._fade_timer)
        self._success_timer = None
        self._fade_timer = None

    def _begin_send(self) -> None:
        self.send_state = ActionState.RUNNING
        self.send_error = None

    def _end_send(self) -> None:
        if self.send_state is ActionState.RUNNING:
            self.send_state = ActionState.IDLE

    def _reset_success(self) -> None:
        self.send_success = False
        self._success_timer = None

    def _drop_live_player(self) -> None:
        if not self.live_visible:
            self.live_player = None
        self._fade_timer = None

    def _later(self, delay: float, callback) -> Optional[asyncio.TimerHandle]:
        if self._closed:
            return None
        return asyncio.get_running_loop().call_later(delay, callback)

    @staticmethod
    def _cancel(handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()
