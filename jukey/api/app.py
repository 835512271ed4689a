"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jukey.config import LOG_LEVEL

# Configure logging here too so watcher/coordinator INFO logs show when uvicorn imports the app directly
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from jukey.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from jukey.api.routes import chat, playback, queue, search, volume

__all__ = ["app", "AppState", "get_state"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger(__name__).info("JUKEy ready")
    yield
    # Stop the poll thread and any pending advance timer
    get_state().shutdown()


app = FastAPI(
    title="JUKEy API",
    description="Chat-driven remote control and play queue for the Spotify desktop app",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat.router, tags=["chat"])
app.include_router(playback.router, prefix="/api/playback", tags=["playback"])
app.include_router(queue.router, prefix="/api/queue", tags=["queue"])
app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(volume.router, prefix="/api/volume", tags=["volume"])
