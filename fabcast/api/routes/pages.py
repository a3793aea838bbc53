"""Broadcast-capture page: one browser source per slot."""
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from fabcast.config import POLL_INTERVAL_SEC
from fabcast.models.overlay import Slot
from fabcast.render.overlay_page import render_overlay_page

router = APIRouter()


@router.get("/overlay", response_class=HTMLResponse)
def overlay_default():
    """Player 1 overlay for callers that omit the slot."""
    return render_overlay_page(Slot.default(), POLL_INTERVAL_SEC)


@router.get("/overlay/{slot}", response_class=HTMLResponse)
def overlay_for_slot(slot: str):
    return render_overlay_page(Slot.parse(slot), POLL_INTERVAL_SEC)
