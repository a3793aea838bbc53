"""FAB leaderboard lookup via httpx, with a short-lived process-local cache."""
import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from fabcast.core.errors import (
    PlayerNotFound,
    UpstreamError,
    UpstreamFormatError,
    UpstreamUnreachable,
    ValidationFailed,
)
from fabcast.core.lookup_cache import LookupCache
from fabcast.models.player import PlayerRecord

logger = logging.getLogger(__name__)


class LeaderboardResult(BaseModel):
    """One row of the upstream leaderboard."""
    rank: Optional[int] = None
    player_id: Optional[str | int] = None
    player_full_name: str
    country: Optional[str] = None
    score: Optional[float] = None
    rank_type: Optional[str] = None


class LeaderboardPage(BaseModel):
    """Upstream envelope; rows are validated one at a time so a garbled tail is ignored."""
    count: Optional[int] = None
    results: Optional[list[Any]] = None

    def first(self) -> Optional[LeaderboardResult]:
        if not self.results:
            return None
        return LeaderboardResult.model_validate(self.results[0])


class LeaderboardClient:
    """Queries the ranked leaderboard filtered to one rating category and one id."""

    def __init__(
        self,
        url: str,
        rank_type: str,
        headers: Optional[dict[str, str]] = None,
        timeout_sec: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._url = url
        self._rank_type = rank_type
        self._client = httpx.Client(
            headers=headers or {},
            timeout=timeout_sec,
            transport=transport,
        )

    def search(self, player_id: str) -> LeaderboardPage:
        """Raw upstream query. Raises the upstream error classes, never returns None."""
        params = {"rank_type": self._rank_type, "search": player_id}
        try:
            resp = self._client.get(self._url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Leaderboard unreachable for %s: %s", player_id, e)
            raise UpstreamUnreachable() from e
        if not resp.is_success:
            logger.warning("Leaderboard returned %s for %s", resp.status_code, player_id)
            raise UpstreamError(resp.status_code)
        try:
            return LeaderboardPage.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Leaderboard payload unreadable for %s: %s", player_id, e)
            raise UpstreamFormatError() from e

    def close(self) -> None:
        self._client.close()


class PlayerLookupService:
    """lookup(id) -> PlayerRecord: trim, cache, query upstream, take the first match."""

    def __init__(self, client: LeaderboardClient, cache: LookupCache) -> None:
        self._client = client
        self._cache = cache

    def lookup(self, raw_id: Optional[str]) -> PlayerRecord:
        player_id = (raw_id or "").strip()
        if not player_id:
            raise ValidationFailed("A player ID is required.")

        cached = self._cache.get(player_id)
        if cached is not None:
            logger.debug("Lookup cache hit for %s", player_id)
            return cached

        page = self._client.search(player_id)
        # One match per id + category is expected; take the first if there are more
        try:
            match = page.first()
        except ValidationError as e:
            logger.warning("Leaderboard row unreadable for %s: %s", player_id, e)
            raise UpstreamFormatError() from e
        if match is None:
            raise PlayerNotFound(player_id)
        record = PlayerRecord(
            id=player_id,
            name=match.player_full_name,
            rating=match.score,
            rank=match.rank,
            country_code=match.country or None,
        )
        self._cache.put(player_id, record)
        logger.info("Looked up %s: %s", player_id, record.name)
        return record

    def close(self) -> None:
        self._client.close()
