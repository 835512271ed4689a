"""Catalog entries: raw provider metadata and session-scoped playables."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PlayableKind(str, Enum):
    TRACK = "track"
    ALBUM = "album"
    PLAYLIST = "playlist"

    @property
    def letter(self) -> str:
        return self.value[0]

    @property
    def is_composite(self) -> bool:
        return self is not PlayableKind.TRACK


@dataclass(frozen=True)
class CatalogItem:
    """Raw metadata as returned by a catalog provider."""
    id: str
    name: str
    uri: str
    kind: PlayableKind
    artists: List[str] = field(default_factory=list)
    member_count: int = 1


@dataclass(frozen=True)
class Playable:
    """Resolved catalog entry. `id` is only unique for the lifetime of the process."""
    id: str
    name: str
    artists: str  # display string, e.g. "Daft Punk, Pharrell Williams"
    kind: PlayableKind
    service_uri: str
    service_id: str
    member_count: int = 1

    @property
    def is_composite(self) -> bool:
        return self.kind.is_composite


@dataclass(frozen=True)
class SearchResult:
    """All three categories are always present, possibly empty."""
    tracks: List[Playable] = field(default_factory=list)
    albums: List[Playable] = field(default_factory=list)
    playlists: List[Playable] = field(default_factory=list)

    def all(self) -> List[Playable]:
        return [*self.tracks, *self.albums, *self.playlists]
