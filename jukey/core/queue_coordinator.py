"""Client-side play queue on top of a player that has none.

QueueCoordinator owns the upcoming-tracks list and the now-playing slot,
expands albums/playlists into tracks before they touch the queue, and
advances exactly once per track boundary, either on an explicit skip or when
the PositionWatcher detects the end of a track.

Queue and playback decisions run under one re-entrant lock shared with the
watcher, so command threads, the poll thread and the one-shot timer thread
never interleave them. Catalog search and album/playlist expansion happen
before the lock is taken, so a slow provider never delays a track change.
"""
import logging
import math
import threading
from typing import Iterable, List, Optional

from jukey.config import END_THRESHOLD_SEC, POLL_INTERVAL_SEC
from jukey.core.catalog import PlayableCatalog
from jukey.core.errors import ExpansionFailure, NotFound, SearchFailure
from jukey.core.ports import PlayerControlPort
from jukey.core.position_watcher import PositionWatcher, is_valid_sample
from jukey.core.volume import VOLUME_MAX, VOLUME_MIN, VOLUME_STEP, is_valid_volume, quantize_volume
from jukey.models.playable import Playable, SearchResult
from jukey.models.playback import CoordinatorState, PlayerState, PlayerStatus, QueueMode

logger = logging.getLogger(__name__)


class QueueCoordinator:
    def __init__(
        self,
        catalog: PlayableCatalog,
        player: PlayerControlPort,
        *,
        poll_interval_sec: float = POLL_INTERVAL_SEC,
        end_threshold_sec: float = END_THRESHOLD_SEC,
        timer_factory=threading.Timer,
    ) -> None:
        self._catalog = catalog
        self._player = player
        self._lock = threading.RLock()
        self._queue: List[Playable] = []
        self._now_playing: Optional[Playable] = None
        self._tracks_started = 0
        self._state = CoordinatorState.IDLE
        self._watcher = PositionWatcher(
            player,
            self._on_track_end,
            self._lock,
            interval_sec=poll_interval_sec,
            threshold_sec=end_threshold_sec,
            timer_factory=timer_factory,
        )

    @property
    def watcher(self) -> PositionWatcher:
        return self._watcher

    @property
    def now_playing(self) -> Optional[Playable]:
        return self._now_playing

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def tracks_started(self) -> int:
        """Count of successful play calls; lets callers tell whether a command started playback."""
        return self._tracks_started

    def queue_snapshot(self) -> List[Playable]:
        with self._lock:
            return list(self._queue)

    # Catalog: may block on the network, so never under the coordinator lock

    def search(self, term: str) -> Optional[SearchResult]:
        try:
            return self._catalog.search(term)
        except SearchFailure:
            return None

    def resolve(self, playable_id: str) -> Optional[Playable]:
        return self._catalog.resolve(playable_id)

    # Queueing

    def enqueue(self, playable_id: str, mode: QueueMode = QueueMode.APPEND) -> Optional[int]:
        """Queue one id. Returns how many tracks are ahead of it (0 if it played
        right away), or None if nothing happened."""
        return self.enqueue_batch(
            [playable_id],
            play_next=mode is QueueMode.PLAY_NEXT,
            play_now=mode is QueueMode.PLAY_NOW,
        )

    def enqueue_batch(
        self,
        playable_ids: Iterable[str],
        play_next: bool = False,
        play_now: bool = False,
    ) -> Optional[int]:
        """Queue several ids as one block. Any unknown id or failed expansion
        fails the whole batch before the queue is touched."""
        tracks = self._expand_all(playable_ids)
        if not tracks:
            return None

        with self._lock:
            if not play_now and self._player.get_state() is PlayerState.PLAYING:
                if play_next:
                    self._queue[0:0] = tracks
                    ahead = 0
                else:
                    ahead = len(self._queue)
                    self._queue.extend(tracks)
                # Playback may have been started on the player itself
                self._watcher.start()
                logger.info(
                    "Queue: added %d track(s) %s, %d ahead, %d queued",
                    len(tracks),
                    "next" if play_next else "at end",
                    ahead,
                    len(self._queue),
                )
                return ahead

            first, rest = tracks[0], tracks[1:]
            if not self._play_track(first):
                return None
            self._queue[0:0] = rest
            return 0

    def _expand_all(self, playable_ids: Iterable[str]) -> List[Playable]:
        tracks: List[Playable] = []
        for playable_id in playable_ids:
            try:
                tracks.extend(self._catalog.expand(playable_id))
            except NotFound:
                logger.info("Queue: unknown id %r, nothing queued", playable_id)
                return []
            except ExpansionFailure as e:
                logger.warning("Queue: %s, nothing queued", e)
                return []
        return tracks

    # Playback

    def play(self, playable_id: str) -> bool:
        """Play an id now. Albums and playlists play their first track and queue the rest."""
        playable = self._catalog.resolve(playable_id)
        if playable is None:
            logger.info("Play: unknown id %r", playable_id)
            return False
        if playable.is_composite:
            return self.enqueue(playable_id, QueueMode.PLAY_NOW) is not None
        with self._lock:
            return self._play_track(playable)

    def _play_track(self, track: Playable) -> bool:
        was_watching = self._watcher.is_active
        previous_state = self._state
        # No stale advance may fire while the new track is starting
        self._watcher.stop()
        self._state = CoordinatorState.TRANSITIONING
        if not self._player.play(track.service_uri):
            logger.warning("Play: player refused %s (%s)", track.id, track.name)
            self._state = previous_state
            if was_watching:
                self._watcher.start()
            return False
        self._now_playing = track
        self._tracks_started += 1
        self._state = CoordinatorState.PLAYING
        self._watcher.start()
        logger.info("Play: now playing %s - %s by %s", track.id, track.name, track.artists)
        return True

    def advance_to_next(self) -> bool:
        """Play the next queued track, or let the player skip on its own when the queue is empty."""
        with self._lock:
            if self._queue:
                # Dropped even if the play fails
                track = self._queue.pop(0)
                return self._play_track(track)
            logger.info("Skip: queue empty, using the player's own next track")
            was_watching = self._watcher.is_active
            self._watcher.stop()
            skipped = self._player.skip_native()
            if skipped or was_watching:
                self._watcher.start()
            return skipped

    skip = advance_to_next

    def _on_track_end(self) -> None:
        with self._lock:
            if not self._queue:
                # Nothing left to advance to; enqueue or resume starts watching again
                logger.info("Track ended with an empty queue, going idle")
                self._watcher.stop()
                self._state = CoordinatorState.IDLE
                return
            logger.info("Track ended, advancing queue")
            self.advance_to_next()

    def pause(self) -> bool:
        with self._lock:
            paused = self._player.pause()
            if paused:
                # A paused track never ends on its own
                self._watcher.stop()
            return paused

    def resume(self) -> bool:
        with self._lock:
            resumed = self._player.resume()
            if resumed:
                self._watcher.start()
            return resumed

    def reset(self) -> bool:
        """Pause, forget the queue and now-playing, stop watching. Always succeeds."""
        with self._lock:
            self._player.pause()
            self._watcher.stop()
            self._queue.clear()
            self._now_playing = None
            self._state = CoordinatorState.IDLE
            logger.info("Reset: queue cleared")
            return True

    def shutdown(self) -> None:
        self._watcher.stop()
        self._watcher.join()

    # Status

    def get_status(self) -> PlayerStatus:
        with self._lock:
            position = self._player.get_position()
            length = self._player.get_length()
            now_playing = self._now_playing
            track_name = self._player.get_track_name()
            artist_name = self._player.get_artist_name()
            if not track_name and now_playing is not None:
                track_name, artist_name = now_playing.name, now_playing.artists
            return PlayerStatus(
                now_playing_name=track_name or "",
                now_playing_artist=artist_name or "",
                position=math.ceil(position) if is_valid_sample(position) else None,
                length=math.floor(length) if is_valid_sample(length) else None,
                player_state=self._player.get_state(),
                volume=self._player.get_volume(),
                coordinator_state=self._state,
                now_playing=now_playing,
                queue=list(self._queue),
            )

    # Volume

    def get_volume(self) -> Optional[int]:
        with self._lock:
            return self._player.get_volume()

    def set_volume(self, volume: int) -> Optional[int]:
        """Apply a volume 0-100. Returns the effective (stepped) value or None."""
        if not is_valid_volume(volume):
            return None
        with self._lock:
            return self._player.set_volume(quantize_volume(volume))

    def volume_up(self) -> Optional[int]:
        """One step up. None when already at the maximum or the volume is unknown."""
        with self._lock:
            current = self._player.get_volume()
            if current is None or current >= VOLUME_MAX:
                return None
            return self._player.set_volume(quantize_volume(min(VOLUME_MAX, current + VOLUME_STEP)))

    def volume_down(self) -> Optional[int]:
        with self._lock:
            current = self._player.get_volume()
            if current is None or current <= VOLUME_MIN:
                return None
            return self._player.set_volume(quantize_volume(max(VOLUME_MIN, current - VOLUME_STEP)))
