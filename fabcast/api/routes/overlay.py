"""Overlay state relay: GET/POST the published state of one slot."""
import json
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from fabcast.api.responses import ok
from fabcast.api.state import AppState, get_state
from fabcast.core.errors import ValidationFailed

router = APIRouter()


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


@router.get("")
def read_overlay_state(slot: Optional[str] = None, state: AppState = Depends(get_state)):
    """Return the slot's state; hidden/empty if it was never written."""
    return ok(state.relay.read(slot))


@router.post("")
async def write_overlay_state(
    request: Request,
    slot: Optional[str] = None,
    state: AppState = Depends(get_state),
):
    """Store the posted object verbatim for the slot and echo it back."""
    try:
        candidate = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        raise ValidationFailed("Invalid state object in request body.")
    stored = await run_in_threadpool(state.relay.write, slot, candidate)
    return ok(stored)


@router.options("")
def overlay_state_preflight():
    return Response(status_code=200)
