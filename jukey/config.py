"""Configuration: env, Spotify credentials, control-surface and polling timings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of jukey package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("JUKEY_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("JUKEY_API_PORT", "4567"))
LOG_LEVEL = os.getenv("JUKEY_LOG_LEVEL", "INFO").upper()

# Spotify Web API (catalog search only, client-credentials grant)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REQUESTS_TIMEOUT_SEC = float(os.getenv("JUKEY_SPOTIFY_TIMEOUT_SEC", "5"))
SEARCH_LIMIT = int(os.getenv("JUKEY_SEARCH_LIMIT", "10"))
MAX_EXPANSION_TRACKS = int(os.getenv("JUKEY_MAX_EXPANSION_TRACKS", "200"))

# Control surface (Spotify desktop app via osascript); hung scripts are killed after this
CONTROL_TIMEOUT_SEC = float(os.getenv("JUKEY_CONTROL_TIMEOUT_SEC", "0.5"))

# End-of-track detection
POLL_INTERVAL_SEC = float(os.getenv("JUKEY_POLL_INTERVAL_SEC", "0.25"))
END_THRESHOLD_SEC = float(os.getenv("JUKEY_END_THRESHOLD_SEC", "5"))

# Player simulation (for development without the Spotify desktop app)
SIMULATE_PLAYER = os.getenv("JUKEY_SIMULATE_PLAYER", "0").lower() in ("1", "true", "yes")
SIMULATED_TRACK_SEC = float(os.getenv("JUKEY_SIMULATED_TRACK_SEC", "30"))

# Chat replies
STATUS_UPCOMING_LIMIT = int(os.getenv("JUKEY_STATUS_UPCOMING_LIMIT", "10"))
