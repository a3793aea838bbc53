"""Display-side poll loop: fetch a slot's state on a fixed interval."""
import asyncio
import contextlib
import logging
from typing import Callable, Optional

from fabcast.client.api_client import POLL_NETWORK_ERROR, OverlayApiClient
from fabcast.config import POLL_INTERVAL_SEC
from fabcast.models.overlay import OverlayState, Slot

logger = logging.getLogger(__name__)


class OverlayPoller:
    """Keeps the last known-good OverlayState for one slot.

    A failed poll sets connection_error and leaves state untouched so the
    display never blanks on a transient outage. No backoff: ticks are scheduled
    on a fixed grid, and a request still pending at the next tick is abandoned.
    """

    def __init__(
        self,
        api: OverlayApiClient,
        slot: Slot,
        interval_sec: float = POLL_INTERVAL_SEC,
        on_state: Optional[Callable[[OverlayState], None]] = None,
    ) -> None:
        self._api = api
        self.slot = slot
        self._interval_sec = interval_sec
        self._on_state = on_state
        self.state = OverlayState.empty()
        self.connection_error: Optional[str] = None
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Poll immediately, then every interval, until stop()."""
        if self._stopped or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._poll_loop())

    async def poll_once(self) -> None:
        result = await self._api.read_overlay(self.slot)
        if self._stopped:
            return
        if result.success:
            self.state = OverlayState.from_dict(result.data)
            self.connection_error = None
            if self._on_state is not None:
                try:
                    self._on_state(self.state)
                except Exception:
                    logger.exception("%s state callback failed", self.slot.label)
        else:
            self._fail(result.error)

    def _fail(self, error: Optional[str]) -> None:
        if self.connection_error != error:
            logger.warning("%s poll failed: %s", self.slot.label, error)
        self.connection_error = error

    async def _poll_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while not self._stopped:
            # A request that outlives its tick counts as a failed poll
            try:
                await asyncio.wait_for(self.poll_once(), timeout=self._interval_sec)
            except asyncio.TimeoutError:
                self._fail(POLL_NETWORK_ERROR)
            next_at += self._interval_sec
            now = loop.time()
            if next_at < now:
                next_at = now
            await asyncio.sleep(next_at - now)

    async def stop(self) -> None:
        """Cancel the loop; later calls are no-ops."""
        if self._stopped:
            return
        self._stopped = True
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def __aenter__(self) -> "OverlayPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
