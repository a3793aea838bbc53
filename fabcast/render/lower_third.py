"""Lower-third visibility contract: which phase to draw for a (player, visible, side) update."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fabcast.models.overlay import OverlayState
from fabcast.models.player import PlayerRecord


class Phase(str, Enum):
    CLEARED = "cleared"    # nothing rendered, takes no layout space
    ENTERING = "entering"  # fade + slide in
    SHOWN = "shown"
    EXITING = "exiting"    # fade + slide out, still showing the last player
    HIDDEN = "hidden"      # exit already played, player still held


@dataclass(frozen=True)
class RenderFrame:
    phase: Phase
    player: Optional[PlayerRecord]
    side: str  # "left" | "right"

    @property
    def is_rendered(self) -> bool:
        return self.phase is not Phase.CLEARED


class LowerThird:
    """Tracks the previous visible flag so transitions animate exactly once."""

    def __init__(self, side: str = "left") -> None:
        if side not in ("left", "right"):
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        self.side = side
        self._was_visible = False

    def update(self, state: OverlayState) -> RenderFrame:
        player, visible = state.player, state.visible
        if player is None and not visible:
            self._was_visible = False
            return RenderFrame(Phase.CLEARED, None, self.side)
        if visible:
            phase = Phase.SHOWN if self._was_visible else Phase.ENTERING
        else:
            phase = Phase.EXITING if self._was_visible else Phase.HIDDEN
        self._was_visible = visible
        return RenderFrame(phase, player, self.side)


def _fmt_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.1f}"


def render_text(frame: RenderFrame) -> str:
    """Single-line text form of the graphic; empty string when nothing is rendered."""
    if not frame.is_rendered or frame.player is None:
        return ""
    p = frame.player
    parts = [p.name.upper()]
    if p.rating is not None:
        parts.append(f"ELO {_fmt_number(p.rating)}")
    if p.rank is not None:
        parts.append(f"RANK #{_fmt_number(p.rank)}")
    if p.country_code:
        parts.append(p.country_code.upper())
    line = " · ".join(parts)
    return line.rjust(60) if frame.side == "right" else line
