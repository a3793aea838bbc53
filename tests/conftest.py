from typing import Callable

import httpx
import pytest

from fabcast.api.app import create_app
from fabcast.api.state import AppState
from fabcast.core.leaderboard_client import LeaderboardClient, PlayerLookupService
from fabcast.core.lookup_cache import LookupCache
from fabcast.core.state_store import MemoryStateStore

from tests.fakes import FakeClock, FakeLeaderboard

LEADERBOARD_URL = "https://leaderboard.test/api/fab/v1/leaderboard/"
KEY_PREFIX = "fab-broadcast:overlay-"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def leaderboard() -> FakeLeaderboard:
    board = FakeLeaderboard()
    board.add("78449312", "Jane Doe")
    return board


def build_lookup(leaderboard: FakeLeaderboard, clock: Callable[[], float], ttl: float = 300.0) -> PlayerLookupService:
    client = LeaderboardClient(LEADERBOARD_URL, "ELO", transport=leaderboard.transport())
    return PlayerLookupService(client, LookupCache(ttl, clock=clock))


@pytest.fixture
def store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def app_state(store, leaderboard, clock) -> AppState:
    return AppState(store, build_lookup(leaderboard, clock), key_prefix=KEY_PREFIX)


@pytest.fixture
def app(app_state):
    return create_app(app_state)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
