"""Session-scoped catalog: short ids for search results and expanded albums/playlists."""
import logging
import threading
from typing import Dict, Iterable, List, Optional

from jukey.core.errors import ExpansionFailure, NotFound, SearchFailure
from jukey.core.ports import PlayableProvider
from jukey.models.playable import CatalogItem, Playable, PlayableKind, SearchResult

logger = logging.getLogger(__name__)

# Search ids have no prefix ("3t1"); expansion ids start with the composite's letter ("a4t1")
SEARCH_ID_PREFIX = ""


def to_playable(item: CatalogItem, playable_id: str) -> Playable:
    return Playable(
        id=playable_id,
        name=item.name,
        artists=", ".join(a for a in item.artists if a),
        kind=item.kind,
        service_uri=item.uri,
        service_id=item.id,
        member_count=item.member_count if item.kind.is_composite else 1,
    )


class PlayableCatalog:
    """Caches everything handed to callers so later commands can refer to it by id.

    Entries live until `reset()` or process exit. Provider calls run without
    holding the internal lock; only id assignment and the entry table are guarded.
    """

    def __init__(self, provider: PlayableProvider) -> None:
        self._provider = provider
        self._entries: Dict[str, Playable] = {}
        self._search_count = 0
        self._expansion_count = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, playable_id: str) -> bool:
        return playable_id in self._entries

    @property
    def search_count(self) -> int:
        return self._search_count

    def _register(self, items: Iterable[CatalogItem], prefix: str, counter: int) -> List[Playable]:
        out = []
        for i, item in enumerate(items, start=1):
            playable = to_playable(item, f"{prefix}{counter}{item.kind.letter}{i}")
            self._entries[playable.id] = playable
            out.append(playable)
        return out

    def search(self, term: str) -> SearchResult:
        """Search the provider and register every result under a fresh id."""
        with self._lock:
            self._search_count += 1
            session = self._search_count
        try:
            raw = self._provider.search_catalog(term)
        except Exception as e:
            logger.warning("Catalog: search %r failed: %s", term, e)
            raise SearchFailure(str(e)) from e

        with self._lock:
            result = SearchResult(
                tracks=self._register(raw.get("tracks") or [], SEARCH_ID_PREFIX, session),
                albums=self._register(raw.get("albums") or [], SEARCH_ID_PREFIX, session),
                playlists=self._register(raw.get("playlists") or [], SEARCH_ID_PREFIX, session),
            )
        logger.info(
            "Catalog: search #%d %r -> %d tracks, %d albums, %d playlists",
            session,
            term,
            len(result.tracks),
            len(result.albums),
            len(result.playlists),
        )
        return result

    def resolve(self, playable_id: str) -> Optional[Playable]:
        with self._lock:
            return self._entries.get(playable_id)

    def expand(self, playable_id: str) -> List[Playable]:
        """Return the tracks to queue for an id: the track itself, or every member of a composite.

        Raises NotFound for unknown ids and ExpansionFailure when members cannot be fetched.
        """
        playable = self.resolve(playable_id)
        if playable is None:
            raise NotFound(playable_id)
        if not playable.is_composite:
            return [playable]

        try:
            if playable.kind is PlayableKind.ALBUM:
                members = self._provider.fetch_album_members(playable.service_id)
            else:
                members = self._provider.fetch_playlist_members(playable.service_id)
        except Exception as e:
            logger.warning("Catalog: expanding %s (%s) failed: %s", playable.id, playable.name, e)
            raise ExpansionFailure(f"Could not fetch tracks of {playable.name!r}") from e

        tracks = [m for m in members if m.kind is PlayableKind.TRACK and m.uri]
        if not tracks:
            raise ExpansionFailure(f"{playable.name!r} has no playable tracks")

        with self._lock:
            self._expansion_count += 1
            expanded = self._register(tracks, playable.kind.letter, self._expansion_count)
        logger.debug("Catalog: expanded %s into %d tracks", playable.id, len(expanded))
        return expanded

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._search_count = 0
            self._expansion_count = 0
