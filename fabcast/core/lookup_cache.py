"""Process-local TTL cache for leaderboard lookups."""
import threading
import time
from typing import Callable, Optional

from fabcast.models.player import PlayerRecord


class LookupCache:
    """Maps normalized player id -> (record, fetched_at). Resets with the process."""

    def __init__(self, ttl_sec: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, tuple[PlayerRecord, float]] = {}
        self._lock = threading.Lock()

    def get(self, player_id: str) -> Optional[PlayerRecord]:
        """Return the record if fetched within the freshness window, else None."""
        with self._lock:
            entry = self._entries.get(player_id)
        if entry is None:
            return None
        record, fetched_at = entry
        if self._clock() - fetched_at >= self._ttl_sec:
            return None
        return record

    def put(self, player_id: str, record: PlayerRecord) -> None:
        with self._lock:
            self._entries[player_id] = (record, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
