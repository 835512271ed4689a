"""Controls the Spotify desktop app via AppleScript (macOS)."""
import logging
import subprocess
from typing import Optional

from jukey.config import CONTROL_TIMEOUT_SEC
from jukey.core.errors import ControlSurfaceFailure
from jukey.core.position_watcher import is_valid_sample
from jukey.core.volume import is_valid_volume, quantize_volume
from jukey.models.playback import PlayerState

logger = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"
APP_NAME = "Spotify"


def _tell(command: str) -> str:
    return f'tell application "{APP_NAME}" to {command}'


SCRIPT_PAUSE = _tell("pause")
SCRIPT_RESUME = _tell("play")
SCRIPT_NEXT = _tell("next track")
SCRIPT_STATE = _tell("player state as string")
SCRIPT_TRACK = _tell("name of current track as string")
SCRIPT_ARTIST = _tell("artist of current track as string")
SCRIPT_POSITION = _tell("player position as string")
SCRIPT_LENGTH = _tell("(duration of current track / 1000) as string")
SCRIPT_REMAINING = _tell("((duration of current track / 1000) - (player position)) as string")
SCRIPT_VOLUME = _tell("sound volume as integer")


def script_play(uri: str) -> str:
    return _tell(f'play track "{uri}"')


def script_set_volume(volume: int) -> str:
    return _tell(f"set sound volume to {volume}")


def run_applescript(script: str, timeout: float = CONTROL_TIMEOUT_SEC) -> str:
    """Run one script and return its trimmed stdout.

    Raises ControlSurfaceFailure on timeout, non-zero exit or stderr output.
    """
    try:
        proc = subprocess.run(
            [OSASCRIPT, "-e", script],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ControlSurfaceFailure(f"AppleScript timed out after {timeout}s") from e
    except OSError as e:
        raise ControlSurfaceFailure(f"Could not run osascript: {e}") from e
    if proc.returncode != 0 or proc.stderr.strip():
        raise ControlSurfaceFailure(proc.stderr.strip() or f"osascript exited {proc.returncode}")
    return proc.stdout.strip()


def _parse_float(text: Optional[str]) -> Optional[float]:
    if not text:
        return None
    try:
        value = float(text.replace(",", "."))  # AppleScript uses the locale's decimal separator
    except ValueError:
        return None
    return value if is_valid_sample(value) else None


class AppleScriptPlayer:
    """PlayerControlPort for the Spotify desktop app. Never raises; failures become False/None."""

    def __init__(self, timeout: float = CONTROL_TIMEOUT_SEC) -> None:
        self._timeout = timeout

    def _do(self, script: str) -> bool:
        try:
            run_applescript(script, self._timeout)
            return True
        except ControlSurfaceFailure as e:
            logger.warning("Player: command failed: %s", e)
            return False

    def _get(self, script: str) -> Optional[str]:
        try:
            return run_applescript(script, self._timeout)
        except ControlSurfaceFailure as e:
            logger.debug("Player: reading failed: %s", e)
            return None

    def play(self, uri: str) -> bool:
        return self._do(script_play(uri))

    def pause(self) -> bool:
        if self.get_state() is not PlayerState.PLAYING:
            return False
        return self._do(SCRIPT_PAUSE)

    def resume(self) -> bool:
        if self.get_state() is PlayerState.PLAYING:
            return False
        return self._do(SCRIPT_RESUME)

    def skip_native(self) -> bool:
        return self._do(SCRIPT_NEXT)

    def get_state(self) -> PlayerState:
        out = self._get(SCRIPT_STATE)
        if out is None:
            # One hung osascript call must not read as "stopped" and cut the current track
            out = self._get(SCRIPT_STATE)
        out = (out or "").lower()
        try:
            return PlayerState(out)
        except ValueError:
            return PlayerState.STOPPED

    def get_position(self) -> Optional[float]:
        return _parse_float(self._get(SCRIPT_POSITION))

    def get_length(self) -> Optional[float]:
        return _parse_float(self._get(SCRIPT_LENGTH))

    def get_remaining(self) -> Optional[float]:
        return _parse_float(self._get(SCRIPT_REMAINING))

    def get_volume(self) -> Optional[int]:
        out = self._get(SCRIPT_VOLUME)
        try:
            volume = int(out)
        except (TypeError, ValueError):
            return None
        # Spotify reports one less than it was set to for odd tens (10, 30, 50...)
        return quantize_volume(volume)

    def set_volume(self, volume: int) -> Optional[int]:
        if not is_valid_volume(volume):
            return None
        volume = quantize_volume(volume)
        if not self._do(script_set_volume(volume)):
            return None
        return volume

    def get_track_name(self) -> Optional[str]:
        return self._get(SCRIPT_TRACK)

    def get_artist_name(self) -> Optional[str]:
        return self._get(SCRIPT_ARTIST)
