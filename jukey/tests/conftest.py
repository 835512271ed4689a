import os
import sys
from typing import Dict, List, Optional

import pytest


def _ensure_project_root_on_sys_path() -> None:
    here = os.path.dirname(__file__)
    project_root = os.path.abspath(os.path.join(here, "..", ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_sys_path()

from jukey.core.catalog import PlayableCatalog  # noqa: E402
from jukey.core.queue_coordinator import QueueCoordinator  # noqa: E402
from jukey.core.volume import quantize_volume  # noqa: E402
from jukey.models.playable import CatalogItem, PlayableKind  # noqa: E402
from jukey.models.playback import PlayerState  # noqa: E402


def track_item(n: int, prefix: str = "trk") -> CatalogItem:
    return CatalogItem(
        id=f"{prefix}{n}",
        name=f"Song {n}",
        uri=f"spotify:track:{prefix}{n}",
        kind=PlayableKind.TRACK,
        artists=[f"Artist {n}"],
    )


class FakeProvider:
    """Canned catalog: 3 tracks, one 3-track album, one 2-track playlist."""

    def __init__(self) -> None:
        self.search_calls: List[str] = []
        self.album_calls: List[str] = []
        self.playlist_calls: List[str] = []
        self.fail_search = False
        self.fail_members = False
        self.search_hook = None
        self.members_hook = None
        self.results: Dict[str, List[CatalogItem]] = {
            "tracks": [track_item(1), track_item(2), track_item(3)],
            "albums": [
                CatalogItem(
                    id="alb1",
                    name="Album One",
                    uri="spotify:album:alb1",
                    kind=PlayableKind.ALBUM,
                    artists=["Band A", "Band B"],
                    member_count=3,
                )
            ],
            "playlists": [
                CatalogItem(
                    id="pl1",
                    name="Playlist One",
                    uri="spotify:playlist:pl1",
                    kind=PlayableKind.PLAYLIST,
                    artists=["dj"],
                    member_count=2,
                )
            ],
        }
        self.albums = {"alb1": [track_item(n, "alb") for n in (1, 2, 3)]}
        self.playlists = {"pl1": [track_item(n, "pl") for n in (1, 2)]}

    def search_catalog(self, term: str) -> Dict[str, List[CatalogItem]]:
        self.search_calls.append(term)
        if self.search_hook is not None:
            self.search_hook()
        if self.fail_search:
            raise RuntimeError("search down")
        return {k: list(v) for k, v in self.results.items()}

    def fetch_album_members(self, album_id: str) -> List[CatalogItem]:
        self.album_calls.append(album_id)
        if self.members_hook is not None:
            self.members_hook()
        if self.fail_members:
            raise RuntimeError("album down")
        return list(self.albums[album_id])

    def fetch_playlist_members(self, playlist_id: str) -> List[CatalogItem]:
        self.playlist_calls.append(playlist_id)
        if self.fail_members:
            raise RuntimeError("playlist down")
        return list(self.playlists[playlist_id])


class FakePlayer:
    """Records every command; readings are plain attributes tests can set."""

    def __init__(self, state: PlayerState = PlayerState.STOPPED) -> None:
        self.state = state
        self.position: Optional[float] = None
        self.length: Optional[float] = None
        self.remaining: Optional[float] = None
        self.volume: Optional[int] = 50
        self.track_name: Optional[str] = None
        self.artist_name: Optional[str] = None
        self.play_result = True
        self.skip_result = True
        self.play_calls: List[str] = []
        self.pause_calls = 0
        self.resume_calls = 0
        self.skip_calls = 0
        self.set_volume_calls: List[int] = []
        self.remaining_hook = None
        self.play_hook = None

    def play(self, uri: str) -> bool:
        self.play_calls.append(uri)
        if self.play_hook is not None:
            self.play_hook()
        if self.play_result:
            self.state = PlayerState.PLAYING
        return self.play_result

    def pause(self) -> bool:
        self.pause_calls += 1
        if self.state is not PlayerState.PLAYING:
            return False
        self.state = PlayerState.PAUSED
        return True

    def resume(self) -> bool:
        self.resume_calls += 1
        if self.state is PlayerState.PLAYING:
            return False
        self.state = PlayerState.PLAYING
        return True

    def skip_native(self) -> bool:
        self.skip_calls += 1
        return self.skip_result

    def get_state(self) -> PlayerState:
        return self.state

    def get_position(self) -> Optional[float]:
        return self.position

    def get_length(self) -> Optional[float]:
        return self.length

    def get_remaining(self) -> Optional[float]:
        if self.remaining_hook is not None:
            self.remaining_hook()
        return self.remaining

    def get_volume(self) -> Optional[int]:
        return self.volume

    def set_volume(self, volume: int) -> Optional[int]:
        self.set_volume_calls.append(volume)
        self.volume = quantize_volume(volume)
        return self.volume

    def get_track_name(self) -> Optional[str]:
        return self.track_name

    def get_artist_name(self) -> Optional[str]:
        return self.artist_name


class FakeTimer:
    """Stands in for threading.Timer; fires only when a test calls fire()."""

    def __init__(self, interval, function, args=None, kwargs=None) -> None:
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args, **self.kwargs)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def timers():
    """Timer factory that keeps every timer it creates in `.created`."""
    created: List[FakeTimer] = []

    def factory(interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args, kwargs)
        created.append(timer)
        return timer

    factory.created = created
    return factory


@pytest.fixture
def catalog(provider):
    return PlayableCatalog(provider)


@pytest.fixture
def coordinator(catalog, player, timers):
    # Poll interval long enough that the real poll thread never ticks; tests call tick() themselves
    c = QueueCoordinator(
        catalog,
        player,
        poll_interval_sec=3600,
        end_threshold_sec=10,
        timer_factory=timers,
    )
    yield c
    c.shutdown()


@pytest.fixture
def searched(coordinator):
    """Coordinator with one search done: ids 1t1-1t3, 1a1 (3 tracks), 1p1 (2 tracks)."""
    coordinator.search("anything")
    return coordinator
