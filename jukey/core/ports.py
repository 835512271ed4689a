from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from jukey.models.playable import CatalogItem
from jukey.models.playback import PlayerState


class PlayerControlPort(Protocol):
    """Port defining what the core needs from the actual player.

    Implementations must never raise for an unresponsive player: a failed or
    timed-out call is reported as False (commands) or None (readings).
    """

    def play(self, uri: str) -> bool:
        """Start playing the given service URI."""

    def pause(self) -> bool:
        """Pause playback. False if already paused or stopped."""

    def resume(self) -> bool:
        """Resume playback. False if already playing."""

    def skip_native(self) -> bool:
        """Ask the player to advance on its own."""

    def get_state(self) -> PlayerState:
        """Return the player's reported state."""

    def get_position(self) -> Optional[float]:
        """Seconds into the current track, or None when unavailable."""

    def get_length(self) -> Optional[float]:
        """Length of the current track in seconds, or None when unavailable."""

    def get_remaining(self) -> Optional[float]:
        """Seconds left in the current track, or None when unavailable."""

    def get_volume(self) -> Optional[int]:
        """Volume 0-100, or None when unavailable."""

    def set_volume(self, volume: int) -> Optional[int]:
        """Apply a volume and return the value the player actually uses."""

    def get_track_name(self) -> Optional[str]:
        """Name of the track the player reports as current."""

    def get_artist_name(self) -> Optional[str]:
        """Artist of the track the player reports as current."""


class PlayableProvider(Protocol):
    """Port for the remote catalog. Implementations raise on failure; the catalog converts."""

    def search_catalog(self, term: str) -> Dict[str, List[CatalogItem]]:
        """Return {"tracks": [...], "albums": [...], "playlists": [...]} in ranking order."""

    def fetch_album_members(self, album_id: str) -> List[CatalogItem]:
        """Return the album's tracks in album order."""

    def fetch_playlist_members(self, playlist_id: str) -> List[CatalogItem]:
        """Return the playlist's tracks in playlist order."""
