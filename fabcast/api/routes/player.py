"""Player lookup against the ranked leaderboard (server-side, avoids browser CORS)."""
from typing import Optional

from fastapi import APIRouter, Depends, Response

from fabcast.api.responses import ok
from fabcast.api.state import AppState, get_state

router = APIRouter()


@router.get("")
def lookup_player(id: Optional[str] = None, state: AppState = Depends(get_state)):
    """Return the leaderboard record for a GEM player ID."""
    record = state.lookup_service.lookup(id)
    return ok(record.to_dict())


@router.options("")
def player_lookup_preflight():
    return Response(status_code=200)
