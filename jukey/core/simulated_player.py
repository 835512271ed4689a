"""In-memory player for development without the Spotify desktop app."""
import threading
import time
from typing import Callable, Optional

from jukey.config import SIMULATED_TRACK_SEC
from jukey.core.volume import is_valid_volume, quantize_volume
from jukey.models.playback import PlayerState


class SimulatedPlayer:
    """Plays nothing, but keeps a clock so end-of-track detection can be exercised.

    Every track lasts `track_length_sec`. When a track runs out the player
    stops, like Spotify does at the end of a single-track play.
    """

    def __init__(
        self,
        track_length_sec: float = SIMULATED_TRACK_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._track_length = track_length_sec
        self._clock = clock
        self._lock = threading.Lock()
        self._uri: Optional[str] = None
        self._started_at: Optional[float] = None
        self._paused_position: Optional[float] = None
        self._volume = 50
        self.play_count = 0

    def _position(self) -> Optional[float]:
        if self._uri is None:
            return None
        if self._paused_position is not None:
            return self._paused_position
        return min(self._track_length, self._clock() - self._started_at)

    def _state(self) -> PlayerState:
        position = self._position()
        if position is None or position >= self._track_length:
            return PlayerState.STOPPED
        if self._paused_position is not None:
            return PlayerState.PAUSED
        return PlayerState.PLAYING

    def play(self, uri: str) -> bool:
        if not uri:
            return False
        with self._lock:
            self._uri = uri
            self._started_at = self._clock()
            self._paused_position = None
            self.play_count += 1
        return True

    def pause(self) -> bool:
        with self._lock:
            if self._state() is not PlayerState.PLAYING:
                return False
            self._paused_position = self._position()
            return True

    def resume(self) -> bool:
        with self._lock:
            if self._state() is not PlayerState.PAUSED:
                return False
            self._started_at = self._clock() - self._paused_position
            self._paused_position = None
            return True

    def skip_native(self) -> bool:
        with self._lock:
            if self._uri is None:
                return False
            # No context to continue with: behave like reaching the end of the track
            self._started_at = self._clock() - self._track_length
            self._paused_position = None
            return True

    def get_state(self) -> PlayerState:
        with self._lock:
            return self._state()

    def get_position(self) -> Optional[float]:
        with self._lock:
            return self._position()

    def get_length(self) -> Optional[float]:
        with self._lock:
            return self._track_length if self._uri is not None else None

    def get_remaining(self) -> Optional[float]:
        with self._lock:
            position = self._position()
            return None if position is None else self._track_length - position

    def get_volume(self) -> Optional[int]:
        with self._lock:
            return self._volume

    def set_volume(self, volume: int) -> Optional[int]:
        if not is_valid_volume(volume):
            return None
        with self._lock:
            self._volume = quantize_volume(volume)
            return self._volume

    @property
    def current_uri(self) -> Optional[str]:
        return self._uri

    # No metadata here; status falls back to what the coordinator asked to play
    def get_track_name(self) -> Optional[str]:
        return None

    def get_artist_name(self) -> Optional[str]:
        return None
