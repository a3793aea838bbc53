"""Fakes for the store backend, the leaderboard upstream and time."""
from typing import Optional

import httpx

from fabcast.core.errors import StoreFailure


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLeaderboard:
    """Upstream stand-in served through httpx.MockTransport; counts requests."""

    def __init__(self) -> None:
        self.players: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.raw_body: Optional[bytes] = None
        self.unreachable = False

    def add(self, player_id: str, name: str, score=1970, rank=142, country="US") -> None:
        self.players[player_id] = {
            "rank": rank,
            "player_id": player_id,
            "player_full_name": name,
            "country": country,
            "score": score,
            "rank_type": "ELO",
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"detail": "upstream says no"})
        search = request.url.params.get("search")
        results = [self.players[search]] if search in self.players else []
        return httpx.Response(200, json={"count": len(results), "results": results})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class BrokenStore:
    """Store whose backend is down; detail must never reach clients."""

    name = "broken"

    def get(self, key):
        raise StoreFailure("Error 111 connecting to secret-host:6379. Connection refused.")

    def set(self, key, value):
        raise StoreFailure("Error 111 connecting to secret-host:6379. Connection refused.")

    def close(self) -> None:
        pass
