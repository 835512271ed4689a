"""Turns chat text ("play 3t1 next", "vol up") into coordinator calls and plain-text replies."""
import logging
from typing import Callable, Dict, List, Optional

from jukey.config import STATUS_UPCOMING_LIMIT
from jukey.core.queue_coordinator import QueueCoordinator
from jukey.models.playable import Playable
from jukey.models.playback import QueueMode

logger = logging.getLogger(__name__)

COMMAND_ALIASES = {"search": "find", "volume": "vol", "next": "skip"}

HELP_TEXT = (
    "JUKEy Commands \n"
    "/jukey find [search term] - /jukey find who let the dogs out \n"
    "/jukey play [id] - adds a song, album or playlist to the queue \n"
    "/jukey play [id] [id] ... - adds several at once \n"
    "/jukey play [id] next - adds it to the queue to be played next \n"
    "/jukey play [id] now - starts playing it immediately \n"
    "/jukey pause - pauses the music \n"
    "/jukey play - unpauses the music \n"
    "/jukey skip - skips to the next song \n"
    "/jukey vol up - volume up \n"
    "/jukey vol down - volume down \n"
    "/jukey vol [0-100] - set the volume \n"
    "/jukey status - get player status \n"
    "/jukey reset - stop the music and clear the queue \n"
)

SORRY = "Sorry, I couldn't seem to do that..."


def format_time(seconds: Optional[int]) -> str:
    """MM:SS, or 00:00 when there is no reading."""
    if seconds is None or seconds < 0:
        return "00:00"
    seconds = int(seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _bullets(playables: List[Playable], label: str) -> str:
    if not playables:
        return f"_No {label} found_"
    return "\n".join(f"• {p.id} – *{p.name}* by *{p.artists}*" for p in playables)


class ChatHandler:
    def __init__(self, coordinator: QueueCoordinator) -> None:
        self._jukebox = coordinator
        self._commands: Dict[str, Callable[[str], str]] = {
            "find": self._find,
            "play": self._play,
            "pause": self._pause,
            "skip": self._skip,
            "status": self._status,
            "vol": self._vol,
            "reset": self._reset,
            "help": self._help,
        }

    @property
    def commands(self) -> List[str]:
        return sorted(self._commands)

    def handle(self, text: str) -> str:
        parts = (text or "").strip().split(None, 1)
        command = parts[0].lower() if parts else ""
        args = parts[1].strip() if len(parts) > 1 else ""
        command = COMMAND_ALIASES.get(command, command)

        handler = self._commands.get(command)
        if handler is None:
            return f"`{command}`?!?! Never heard of 'em. (try help)"
        logger.info("Chat: %s %r", command, args)
        return handler(args)

    def _help(self, _args: str) -> str:
        return HELP_TEXT

    def _find(self, term: str) -> str:
        if not term:
            return "Find what? Try `find who let the dogs out`"
        results = self._jukebox.search(term)
        if results is None:
            return "Sorry, search isn't working right now."
        return (
            "\n"
            f"*{term} (Tracks):* \n{_bullets(results.tracks, 'tracks')}\n\n"
            f"*{term} (Albums):* \n{_bullets(results.albums, 'albums')}\n\n"
            f"*{term} (Playlists):* \n{_bullets(results.playlists, 'playlists')}\n"
        )

    def _play(self, args: str) -> str:
        if not args:
            if self._jukebox.resume():
                return "Let there be sound!"
            return "Correct me if I'm wrong, but I think it's already playing"

        ids = args.split()
        when = ids[-1].lower() if ids[-1].lower() in ("now", "next") else ""
        if when:
            ids = ids[:-1]
        if not ids:
            return SORRY

        if when == "now":
            if len(ids) == 1:
                ok = self._jukebox.play(ids[0])
            else:
                ok = self._jukebox.enqueue_batch(ids, play_now=True) is not None
            return "Coming right up!" if ok else SORRY

        started_before = self._jukebox.tracks_started
        if len(ids) == 1:
            mode = QueueMode.PLAY_NEXT if when == "next" else QueueMode.APPEND
            pos = self._jukebox.enqueue(ids[0], mode)
        else:
            pos = self._jukebox.enqueue_batch(ids, play_next=when == "next")
        if pos is None:
            return SORRY
        if self._jukebox.tracks_started != started_before:
            # Nothing was playing, so it started right away
            return "Coming right up!"
        if when == "next" or pos == 0:
            return "It'll be up next!"
        s = "" if pos == 1 else "s"
        verb = "is" if pos == 1 else "are"
        return f"Added to queue. There {verb} {pos} song{s} ahead of you"

    def _pause(self, _args: str) -> str:
        if self._jukebox.pause():
            return "Music paused"
        return "I can't do that. Are you sure it's playing?"

    def _skip(self, _args: str) -> str:
        if self._jukebox.skip():
            return "On to bigger and better things!"
        return "Sorry, I can't do that"

    def _reset(self, _args: str) -> str:
        self._jukebox.reset()
        return "Queue cleared, silence restored."

    def _status(self, _args: str) -> str:
        status = self._jukebox.get_status()
        queue = status.queue
        upcoming = "\n".join(f"• {t.name} by {t.artists}" for t in queue[:STATUS_UPCOMING_LIMIT])
        if len(queue) > STATUS_UPCOMING_LIMIT:
            upcoming += f"\n• _...and {len(queue) - STATUS_UPCOMING_LIMIT} more_"
        if not upcoming:
            upcoming = "_Nothing queued_"
        if status.now_playing_name:
            playing = f"{status.now_playing_name} by {status.now_playing_artist}"
        else:
            playing = "_nothing_"
        return (
            "*JUKEy status report* \n"
            "----------------------------- \n"
            f"*Currently playing:* {playing} ({status.player_state.value}) \n"
            f"*Position:* {format_time(status.position)} / {format_time(status.length)} \n"
            f"*Volume:* {status.volume if status.volume is not None else '?'}% \n"
            "*Up next:* \n"
            f"{upcoming} \n"
        )

    def _vol(self, args: str) -> str:
        args = args.strip().lower()
        current = self._jukebox.get_volume()
        if args == "":
            return f"Current volume {current}%. Use vol up / vol down / vol [number] to change"
        if args == "up":
            if self._jukebox.volume_up() is not None:
                return "Pumping it up!"
            return "It is already on 11. Maybe get bigger speakers?"
        if args == "down":
            if self._jukebox.volume_down() is not None:
                return "Taking it down a notch..."
            return "Looks like this is as quiet as it goes."
        try:
            value = int(args)
        except ValueError:
            value = -1
        if not 0 <= value <= 100:
            return "I can only handle `vol up` or `vol down` or `vol [number]` (0-100)."
        effective = self._jukebox.set_volume(value)
        if effective is None:
            return SORRY
        return f"Aye Aye! Changing volume from {current}% to {effective}%"
