"""Map core models to the JSON shapes returned by the API."""
from jukey.models.playable import Playable, SearchResult
from jukey.models.playback import PlayerStatus


def playable_to_dict(p: Playable) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "artists": p.artists,
        "type": p.kind.value,
        "uri": p.service_uri,
        "member_count": p.member_count,
    }


def search_to_dict(result: SearchResult) -> dict:
    return {
        "tracks": [playable_to_dict(p) for p in result.tracks],
        "albums": [playable_to_dict(p) for p in result.albums],
        "playlists": [playable_to_dict(p) for p in result.playlists],
    }


def status_to_dict(status: PlayerStatus) -> dict:
    return {
        "track_name": status.now_playing_name,
        "artist_name": status.now_playing_artist,
        "state": status.player_state.value,
        "coordinator_state": status.coordinator_state.value,
        "vol": status.volume,
        "position": status.position,
        "length": status.length,
        "playing": playable_to_dict(status.now_playing) if status.now_playing else None,
        "queue": [playable_to_dict(p) for p in status.queue],
    }
