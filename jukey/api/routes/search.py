"""Catalog search: results get short ids usable with the queue and play endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query

from jukey.api.serializers import playable_to_dict, search_to_dict
from jukey.api.state import AppState, get_state

router = APIRouter()


@router.get("")
def search(q: str = Query(..., min_length=1), state: AppState = Depends(get_state)):
    result = state.coordinator.search(q)
    if result is None:
        raise HTTPException(status_code=503, detail="Search is unavailable")
    return search_to_dict(result)


@router.get("/{playable_id}")
def resolve(playable_id: str, state: AppState = Depends(get_state)):
    """Look up an id handed out earlier in this session."""
    playable = state.coordinator.resolve(playable_id)
    if playable is None:
        raise HTTPException(status_code=404, detail="Not found")
    return playable_to_dict(playable)
