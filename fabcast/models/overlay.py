"""Overlay slots and the state published for each of them."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from fabcast.models.player import PlayerRecord


class Slot(str, Enum):
    """Independent overlay channel, one store key each."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @classmethod
    def default(cls) -> "Slot":
        return cls.PLAYER1

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Slot":
        """Never fails: unknown or missing identifiers map to the default slot."""
        if raw is not None:
            for slot in cls:
                if slot.value == raw.strip().lower():
                    return slot
        return cls.default()

    @property
    def side(self) -> str:
        """Screen anchoring for the lower third: Player 1 left, Player 2 right."""
        return "right" if self is Slot.PLAYER2 else "left"

    @property
    def label(self) -> str:
        return "Player 2" if self is Slot.PLAYER2 else "Player 1"


@dataclass(frozen=True)
class OverlayState:
    """Shared state for one slot.

    visible=True requires a player (the publisher enforces it).
    visible=False with a player is the fade-out state.
    """
    player: Optional[PlayerRecord] = None
    visible: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player.to_dict() if self.player else None,
            "visible": self.visible,
        }

    @classmethod
    def empty(cls) -> "OverlayState":
        return cls(player=None, visible=False)

    @classmethod
    def from_dict(cls, data: Any) -> "OverlayState":
        """Malformed stored shapes render as empty rather than failing."""
        if not isinstance(data, dict):
            return cls.empty()
        player = PlayerRecord.from_dict(data.get("player"))
        visible = data.get("visible") is True and player is not None
        return cls(player=player, visible=visible)


EMPTY_STATE: dict[str, Any] = {"player": None, "visible": False}
