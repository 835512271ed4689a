"""Player and queue state."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from jukey.models.playable import Playable


class PlayerState(str, Enum):
    """State reported by the control surface."""
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


class QueueMode(str, Enum):
    APPEND = "append"
    PLAY_NEXT = "next"
    PLAY_NOW = "now"


class CoordinatorState(str, Enum):
    """Coordinator's own view. Status readers only ever see IDLE or PLAYING.

    TRANSITIONING is held only while a play call runs under the coordinator
    lock, so it is visible to the player during that call and nowhere else.
    """
    IDLE = "idle"
    PLAYING = "playing"
    TRANSITIONING = "transitioning"


@dataclass
class PlayerStatus:
    """Snapshot of what the control surface reports plus our own queue."""
    now_playing_name: str
    now_playing_artist: str
    position: Optional[int]  # seconds, None when the player gave no reading
    length: Optional[int]
    player_state: PlayerState
    volume: Optional[int]
    coordinator_state: CoordinatorState
    now_playing: Optional[Playable] = None
    queue: List[Playable] = field(default_factory=list)
