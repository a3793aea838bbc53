"""Player record looked up from the ranked leaderboard."""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PlayerRecord:
    """One competitor as shown on the lower third.

    rank is expected to be None exactly when rating is None (unrated players);
    the leaderboard does not guarantee it, so it is not enforced here.
    """
    id: str
    name: str
    rating: Optional[float] = None
    rank: Optional[int] = None
    country_code: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "rank": self.rank,
            "countryCode": self.country_code,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["PlayerRecord"]:
        """Parse the wire form; returns None for anything that is not a usable record."""
        if not isinstance(data, dict):
            return None
        id_ = data.get("id")
        name = data.get("name")
        if not isinstance(name, str) or not name:
            return None
        rating = data.get("rating")
        rank = data.get("rank")
        country = data.get("countryCode")
        return cls(
            id=str(id_) if id_ is not None else "",
            name=name,
            rating=rating if isinstance(rating, (int, float)) and not isinstance(rating, bool) else None,
            rank=rank if isinstance(rank, int) and not isinstance(rank, bool) else None,
            country_code=country if isinstance(country, str) and country else None,
        )
