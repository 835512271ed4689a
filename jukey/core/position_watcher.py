"""End-of-track detection: a recurring poll of remaining time plus a one-shot advance timer.

The player has no "track finished" event, so a poll thread samples the
remaining time and, once it drops under a threshold, schedules a single
timer for the exact end. Every decision is re-checked under the shared lock
after the sampling call, because a skip or play may have restarted the
watcher while the sample was in flight.
"""
import logging
import math
import threading
from typing import Callable, Optional

from jukey.config import END_THRESHOLD_SEC, POLL_INTERVAL_SEC
from jukey.core.ports import PlayerControlPort

logger = logging.getLogger(__name__)


def is_valid_sample(value) -> bool:
    """A reading is usable only if it is a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


class PositionWatcher:
    """Polls remaining playback time and fires `on_track_end` once per track.

    `lock` must be the lock that serializes the owner's state; both the tick
    decision and the one-shot callback run while holding it.
    """

    def __init__(
        self,
        player: PlayerControlPort,
        on_track_end: Callable[[], None],
        lock,
        *,
        interval_sec: float = POLL_INTERVAL_SEC,
        threshold_sec: float = END_THRESHOLD_SEC,
        timer_factory=threading.Timer,
    ) -> None:
        self._player = player
        self._on_track_end = on_track_end
        self._lock = lock
        self._interval_sec = interval_sec
        self._threshold_sec = threshold_sec
        self._timer_factory = timer_factory
        # Bumped on every start/stop; ticks and timers from an older generation are stale
        self._generation = 0
        self._stop_event: Optional[threading.Event] = None
        self._poll_thread: Optional[threading.Thread] = None
        self._timer = None

    @property
    def is_active(self) -> bool:
        return self._stop_event is not None

    @property
    def has_pending_advance(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Start the poll loop. No-op when already running."""
        with self._lock:
            if self._stop_event is not None:
                return
            self._generation += 1
            stop_event = threading.Event()
            self._stop_event = stop_event
            thread = threading.Thread(
                target=self._poll_loop,
                args=(stop_event, self._generation),
                name="jukey-position-watcher",
                daemon=True,
            )
            self._poll_thread = thread
            thread.start()
        logger.debug("Watcher: started (interval %.2fs)", self._interval_sec)

    def stop(self) -> None:
        """Stop the poll loop and cancel a pending advance. Idempotent."""
        with self._lock:
            self._generation += 1
            if self._stop_event is not None:
                self._stop_event.set()
                self._stop_event = None
                logger.debug("Watcher: stopped")
            self._cancel_pending()

    def join(self, timeout: float = 2.0) -> None:
        """Wait for the last poll thread to exit. Never call while holding the lock."""
        thread = self._poll_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Watcher: cancelled pending advance")

    def _is_current(self, generation: int) -> bool:
        return self._stop_event is not None and generation == self._generation

    def _poll_loop(self, stop_event: threading.Event, generation: int) -> None:
        while not stop_event.wait(timeout=self._interval_sec):
            try:
                self.tick(generation)
            except Exception as e:
                logger.warning("Watcher: tick failed: %s", e)

    def tick(self, generation: Optional[int] = None) -> bool:
        """Sample remaining time once. Returns True if an advance was scheduled."""
        with self._lock:
            if generation is None:
                generation = self._generation
            if not self._is_current(generation):
                return False

        remaining = self._player.get_remaining()
        if not is_valid_sample(remaining):
            logger.debug("Watcher: ignoring unusable sample %r", remaining)
            return False

        with self._lock:
            if not self._is_current(generation):
                logger.debug("Watcher: watcher restarted while sampling, dropping sample")
                return False
            if remaining >= self._threshold_sec or self._timer is not None:
                return False
            timer = self._timer_factory(remaining, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()
        logger.info("Watcher: track ends in %.2fs, advance scheduled", remaining)
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                logger.debug("Watcher: stale advance timer ignored")
                return
            self._timer = None
            self._on_track_end()
