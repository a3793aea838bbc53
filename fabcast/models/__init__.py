"""Data models for players, slots, and overlay state."""
from fabcast.models.overlay import EMPTY_STATE, OverlayState, Slot
from fabcast.models.player import PlayerRecord

__all__ = [
    "EMPTY_STATE",
    "OverlayState",
    "PlayerRecord",
    "Slot",
]
