"""Playback control: play, pause, resume, skip, reset and current state."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from jukey.api.serializers import status_to_dict
from jukey.api.state import AppState, get_state

router = APIRouter()


class PlayBody(BaseModel):
    id: Optional[str] = None


@router.get("")
def get_playback(state: AppState = Depends(get_state)):
    """Return current player state, now playing and queue."""
    return status_to_dict(state.coordinator.get_status())


@router.post("/play")
def playback_play(
    body: PlayBody | None = Body(None),
    state: AppState = Depends(get_state),
):
    """Play an id now (albums/playlists queue their remaining tracks); without id, resume."""
    playable_id = body.id if body else None
    if not playable_id:
        if not state.coordinator.resume():
            raise HTTPException(status_code=409, detail="Already playing")
        return {"ok": True}
    if state.coordinator.resolve(playable_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown id {playable_id}")
    if not state.coordinator.play(playable_id):
        raise HTTPException(status_code=502, detail="Player did not start playback")
    return {"ok": True}


@router.post("/pause")
def playback_pause(state: AppState = Depends(get_state)):
    if not state.coordinator.pause():
        raise HTTPException(status_code=409, detail="Not playing")
    return {"ok": True}


@router.post("/resume")
def playback_resume(state: AppState = Depends(get_state)):
    if not state.coordinator.resume():
        raise HTTPException(status_code=409, detail="Already playing")
    return {"ok": True}


@router.post("/skip")
def playback_skip(state: AppState = Depends(get_state)):
    """Play the next queued track, or the player's own next track when the queue is empty."""
    if not state.coordinator.skip():
        raise HTTPException(status_code=502, detail="Could not skip")
    return {"ok": True}


@router.post("/reset")
def playback_reset(state: AppState = Depends(get_state)):
    """Pause, clear the queue and forget what was playing."""
    state.coordinator.reset()
    return {"ok": True}
