"""Core services: state store, overlay relay, leaderboard lookup."""
from fabcast.core.leaderboard_client import LeaderboardClient, PlayerLookupService
from fabcast.core.lookup_cache import LookupCache
from fabcast.core.overlay_relay import OverlayRelay
from fabcast.core.state_store import (
    MemoryStateStore,
    RedisStateStore,
    StateStore,
    UpstashStateStore,
    build_store,
)

__all__ = [
    "LeaderboardClient",
    "LookupCache",
    "MemoryStateStore",
    "OverlayRelay",
    "PlayerLookupService",
    "RedisStateStore",
    "StateStore",
    "UpstashStateStore",
    "build_store",
]
