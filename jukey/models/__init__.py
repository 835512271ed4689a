"""Data models for catalog entries, playback and queue state."""
from jukey.models.playable import CatalogItem, Playable, PlayableKind, SearchResult
from jukey.models.playback import CoordinatorState, PlayerState, PlayerStatus, QueueMode

__all__ = [
    "CatalogItem",
    "Playable",
    "PlayableKind",
    "SearchResult",
    "CoordinatorState",
    "PlayerState",
    "PlayerStatus",
    "QueueMode",
]
