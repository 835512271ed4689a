"""Volume in steps of 10; responses carry the value the player actually applied."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from jukey.api.state import AppState, get_state

router = APIRouter()


class VolumeBody(BaseModel):
    volume: int = Field(..., ge=0, le=100)


@router.get("")
def get_volume(state: AppState = Depends(get_state)):
    return {"volume": state.coordinator.get_volume()}


@router.post("")
def set_volume(body: VolumeBody, state: AppState = Depends(get_state)):
    effective = state.coordinator.set_volume(body.volume)
    if effective is None:
        raise HTTPException(status_code=502, detail="Player did not accept the volume")
    return {"volume": effective}


@router.post("/up")
def volume_up(state: AppState = Depends(get_state)):
    effective = state.coordinator.volume_up()
    if effective is None:
        raise HTTPException(status_code=409, detail="Already at maximum volume")
    return {"volume": effective}


@router.post("/down")
def volume_down(state: AppState = Depends(get_state)):
    effective = state.coordinator.volume_down()
    if effective is None:
        raise HTTPException(status_code=409, detail="Already muted")
    return {"volume": effective}
