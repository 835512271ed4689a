"""Chat webhook (Slack slash-command style) and a compact status endpoint."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from jukey.api.serializers import status_to_dict
from jukey.api.state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_text(request: Request) -> str:
    """Slack posts a form; other clients may post JSON. Both carry `text`."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json()
            text = body.get("text") if isinstance(body, dict) else None
        else:
            form = await request.form()
            text = form.get("text")
    except ValueError:
        text = None
    return text if isinstance(text, str) else ""


@router.post("/")
async def handle_chat(request: Request, state: AppState = Depends(get_state)):
    """Run one chat command and reply in channel."""
    text = (await _read_text(request)).strip()
    if not text:
        logger.info("Chat: bad request")
        raise HTTPException(status_code=400, detail="bad request")
    logger.info("Chat: received %r", text)
    # Coordinator calls block on the player; keep them off the event loop
    reply = await run_in_threadpool(state.chat_handler.handle, text)
    logger.debug("Chat: replied %r", reply)
    return {"response_type": "in_channel", "text": reply}


@router.get("/status")
def get_status(state: AppState = Depends(get_state)):
    """Return what the player reports plus the queue."""
    return status_to_dict(state.coordinator.get_status())
