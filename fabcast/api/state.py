"""Application state (explicitly constructed, injected into routes)."""
from fastapi import Request

from fabcast.config import (
    KEY_PREFIX,
    LEADERBOARD_HEADERS,
    LEADERBOARD_URL,
    LOOKUP_CACHE_TTL_SEC,
    RANK_TYPE,
    REDIS_URL,
    STORE_TIMEOUT_SEC,
    UPSTASH_REST_TOKEN,
    UPSTASH_REST_URL,
    UPSTREAM_TIMEOUT_SEC,
)
from fabcast.core.leaderboard_client import LeaderboardClient, PlayerLookupService
from fabcast.core.lookup_cache import LookupCache
from fabcast.core.overlay_relay import OverlayRelay
from fabcast.core.state_store import StateStore, build_store


class AppState:
    def __init__(
        self,
        store: StateStore,
        lookup_service: PlayerLookupService,
        key_prefix: str = KEY_PREFIX,
    ) -> None:
        self.store = store
        self.relay = OverlayRelay(store, key_prefix)
        self.lookup_service = lookup_service

    @classmethod
    def from_config(cls) -> "AppState":
        store = build_store(
            redis_url=REDIS_URL,
            upstash_url=UPSTASH_REST_URL,
            upstash_token=UPSTASH_REST_TOKEN,
            timeout_sec=STORE_TIMEOUT_SEC,
        )
        client = LeaderboardClient(
            LEADERBOARD_URL,
            RANK_TYPE,
            headers=LEADERBOARD_HEADERS,
            timeout_sec=UPSTREAM_TIMEOUT_SEC,
        )
        return cls(store, PlayerLookupService(client, LookupCache(LOOKUP_CACHE_TTL_SEC)))

    def close(self) -> None:
        self.lookup_service.close()
        self.store.close()


def get_state(request: Request) -> AppState:
    return request.app.state.fabcast

