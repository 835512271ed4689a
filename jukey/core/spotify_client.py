"""Spotify catalog search and album/playlist track listing via Spotipy (client-credentials)."""
import logging
from typing import Any, Dict, Iterator, List, Optional

from spotipy import Spotify
from spotipy.oauth2 import SpotifyClientCredentials

from jukey.config import (
    MAX_EXPANSION_TRACKS,
    SEARCH_LIMIT,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REQUESTS_TIMEOUT_SEC,
)
from jukey.core.errors import ProviderNotConfigured
from jukey.models.playable import CatalogItem, PlayableKind

logger = logging.getLogger(__name__)

SEARCH_TYPES = "track,album,playlist"


def get_spotify_client(
    client_id: str = SPOTIFY_CLIENT_ID,
    client_secret: str = SPOTIFY_CLIENT_SECRET,
) -> Optional[Spotify]:
    """Return a Spotipy client for the Web API, or None if credentials are not set."""
    if not client_id or not client_secret:
        return None
    auth = SpotifyClientCredentials(client_id=client_id, client_secret=client_secret)
    return Spotify(auth_manager=auth, requests_timeout=SPOTIFY_REQUESTS_TIMEOUT_SEC)


def _artist_names(item: dict) -> List[str]:
    return [a.get("name", "") for a in item.get("artists") or [] if a and a.get("name")]


def item_from_spotify(item: dict) -> Optional[CatalogItem]:
    """Map a Spotify track/album/playlist object to a CatalogItem; None for anything else."""
    if not item or not item.get("id"):
        return None
    try:
        kind = PlayableKind(item.get("type", ""))
    except ValueError:
        return None

    if kind is PlayableKind.PLAYLIST:
        owner = (item.get("owner") or {}).get("display_name") or ""
        artists = [owner] if owner else []
        member_count = int((item.get("tracks") or {}).get("total") or 0)
    elif kind is PlayableKind.ALBUM:
        artists = _artist_names(item)
        member_count = int(item.get("total_tracks") or 0)
    else:
        artists = _artist_names(item)
        member_count = 1

    return CatalogItem(
        id=item["id"],
        name=item.get("name") or "",
        uri=item.get("uri") or "",
        kind=kind,
        artists=artists,
        member_count=member_count,
    )


class SpotifyCatalogProvider:
    """PlayableProvider backed by the Spotify Web API. Errors from Spotipy propagate."""

    def __init__(
        self,
        client: Optional[Spotify] = None,
        search_limit: int = SEARCH_LIMIT,
        max_tracks: int = MAX_EXPANSION_TRACKS,
    ) -> None:
        self._client = client
        self._search_limit = search_limit
        self._max_tracks = max_tracks

    def _sp(self) -> Spotify:
        if self._client is None:
            self._client = get_spotify_client()
        if self._client is None:
            raise ProviderNotConfigured("SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET not set")
        return self._client

    def _pages(self, first_page: Optional[Dict[str, Any]]) -> Iterator[dict]:
        """Yield items across pages until the track cap is reached."""
        page = first_page
        count = 0
        while page:
            for item in page.get("items") or []:
                if count >= self._max_tracks:
                    logger.info("Spotify: stopping at %d tracks", self._max_tracks)
                    return
                count += 1
                yield item
            page = self._sp().next(page) if page.get("next") else None

    def search_catalog(self, term: str) -> Dict[str, List[CatalogItem]]:
        result = self._sp().search(q=term, type=SEARCH_TYPES, limit=self._search_limit, offset=0) or {}
        out: Dict[str, List[CatalogItem]] = {}
        for key in ("tracks", "albums", "playlists"):
            # Spotify returns null entries for playlists it cannot show
            items = (result.get(key) or {}).get("items") or []
            out[key] = [c for c in (item_from_spotify(i) for i in items) if c is not None]
        return out

    def fetch_album_members(self, album_id: str) -> List[CatalogItem]:
        first = self._sp().album_tracks(album_id, limit=50)
        return [c for c in (item_from_spotify(i) for i in self._pages(first)) if c is not None]

    def fetch_playlist_members(self, playlist_id: str) -> List[CatalogItem]:
        first = self._sp().playlist_items(playlist_id, limit=100, additional_types=("track",))
        tracks = []
        for entry in self._pages(first):
            track = item_from_spotify((entry or {}).get("track") or {})
            # Local files have no playable URI
            if track is not None and track.kind is PlayableKind.TRACK and track.uri:
                tracks.append(track)
        return tracks
