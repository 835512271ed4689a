"""Queue: list, add (append / next / now) and clear."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from jukey.api.serializers import playable_to_dict
from jukey.api.state import AppState, get_state
from jukey.models.playback import QueueMode

router = APIRouter()


class EnqueueBody(BaseModel):
    ids: List[str] = Field(..., min_length=1)
    mode: QueueMode = QueueMode.APPEND


@router.get("")
def list_queue(state: AppState = Depends(get_state)):
    """Return a snapshot of upcoming tracks in play order."""
    return [playable_to_dict(p) for p in state.coordinator.queue_snapshot()]


@router.post("")
def enqueue(body: EnqueueBody, state: AppState = Depends(get_state)):
    """Add ids as one block; unknown ids fail the whole request and nothing is queued."""
    coordinator = state.coordinator
    if len(body.ids) == 1:
        ahead = coordinator.enqueue(body.ids[0], body.mode)
    else:
        ahead = coordinator.enqueue_batch(
            body.ids,
            play_next=body.mode is QueueMode.PLAY_NEXT,
            play_now=body.mode is QueueMode.PLAY_NOW,
        )
    if ahead is None:
        raise HTTPException(status_code=404, detail="Could not queue: unknown id or unavailable tracks")
    return {"ahead": ahead, "queue_length": len(coordinator.queue_snapshot())}


@router.delete("", status_code=204)
def clear_queue(state: AppState = Depends(get_state)):
    """Same as reset: pause and clear."""
    state.coordinator.reset()
