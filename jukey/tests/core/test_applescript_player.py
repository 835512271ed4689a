import subprocess
from unittest.mock import MagicMock, patch

import pytest

from jukey.core import applescript_player
from jukey.core.applescript_player import (
    OSASCRIPT,
    SCRIPT_NEXT,
    SCRIPT_PAUSE,
    SCRIPT_RESUME,
    AppleScriptPlayer,
    run_applescript,
    script_play,
    script_set_volume,
)
from jukey.core.errors import ControlSurfaceFailure
from jukey.models.playback import PlayerState


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(
        args=[OSASCRIPT], returncode=returncode, stdout=stdout, stderr=stderr
    )


class ScriptedOsascript:
    """Answers each script with a canned stdout; records every script it ran."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.scripts = []

    def __call__(self, argv, **kwargs):
        script = argv[2]
        self.scripts.append(script)
        answer = self.answers.get(script, "")
        if isinstance(answer, list):
            answer = answer.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return completed(stdout=answer + "\n")


@pytest.fixture
def osascript(monkeypatch):
    fake = ScriptedOsascript()
    monkeypatch.setattr(applescript_player.subprocess, "run", fake)
    return fake


@pytest.fixture
def sp():
    return AppleScriptPlayer(timeout=0.5)


class TestRunAppleScript:
    def test_returns_trimmed_stdout_and_passes_timeout(self):
        with patch("subprocess.run", return_value=completed(stdout=" playing \n")) as run:
            assert run_applescript("script", timeout=0.5) == "playing"

        argv = run.call_args.args[0]
        assert argv == [OSASCRIPT, "-e", "script"]
        assert run.call_args.kwargs["timeout"] == 0.5

    def test_timeout_is_control_surface_failure(self):
        side_effect = subprocess.TimeoutExpired(cmd=OSASCRIPT, timeout=0.5)
        with patch("subprocess.run", side_effect=side_effect):
            with pytest.raises(ControlSurfaceFailure):
                run_applescript("script")

    def test_missing_binary_is_control_surface_failure(self):
        with patch("subprocess.run", side_effect=FileNotFoundError(OSASCRIPT)):
            with pytest.raises(ControlSurfaceFailure):
                run_applescript("script")

    def test_non_zero_exit_is_failure(self):
        with patch("subprocess.run", return_value=completed(returncode=1)):
            with pytest.raises(ControlSurfaceFailure):
                run_applescript("script")

    def test_stderr_is_failure(self):
        result = completed(stdout="x", stderr="execution error: Spotify got an error")
        with patch("subprocess.run", return_value=result):
            with pytest.raises(ControlSurfaceFailure, match="Spotify got an error"):
                run_applescript("script")


def test_scripts_target_spotify():
    assert script_play("spotify:track:abc") == (
        'tell application "Spotify" to play track "spotify:track:abc"'
    )
    assert script_set_volume(40) == 'tell application "Spotify" to set sound volume to 40'


class TestCommands:
    def test_play_runs_play_script(self, sp, osascript):
        assert sp.play("spotify:track:abc") is True
        assert osascript.scripts == [script_play("spotify:track:abc")]

    def test_command_failure_is_false(self, sp, osascript):
        osascript.answers[SCRIPT_NEXT] = subprocess.TimeoutExpired(OSASCRIPT, 0.5)

        assert sp.skip_native() is False

    def test_pause_only_when_playing(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_STATE] = "paused"

        assert sp.pause() is False
        assert SCRIPT_PAUSE not in osascript.scripts

    def test_pause_while_playing(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_STATE] = "playing"

        assert sp.pause() is True
        assert osascript.scripts[-1] == SCRIPT_PAUSE

    def test_resume_does_nothing_while_playing(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_STATE] = "playing"

        assert sp.resume() is False
        assert SCRIPT_RESUME not in osascript.scripts

    def test_resume_from_pause(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_STATE] = "paused"

        assert sp.resume() is True
        assert osascript.scripts[-1] == SCRIPT_RESUME


class TestReadings:
    @pytest.mark.parametrize(
        "out,expected",
        [
            ("playing", PlayerState.PLAYING),
            ("Paused", PlayerState.PAUSED),
            ("stopped", PlayerState.STOPPED),
            ("", PlayerState.STOPPED),
            ("kPSP", PlayerState.STOPPED),
        ],
    )
    def test_state(self, sp, osascript, out, expected):
        osascript.answers[applescript_player.SCRIPT_STATE] = out

        assert sp.get_state() is expected

    def test_state_on_failure_is_stopped(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_STATE] = OSError("no osascript")

        assert sp.get_state() is PlayerState.STOPPED
        assert osascript.scripts.count(applescript_player.SCRIPT_STATE) == 2

    def test_state_read_is_retried_once(self, sp, osascript):
        timeout = subprocess.TimeoutExpired(OSASCRIPT, 0.5)
        osascript.answers[applescript_player.SCRIPT_STATE] = [timeout, "playing"]

        assert sp.get_state() is PlayerState.PLAYING

    def test_pause_survives_one_hung_state_read(self, sp, osascript):
        timeout = subprocess.TimeoutExpired(OSASCRIPT, 0.5)
        osascript.answers[applescript_player.SCRIPT_STATE] = [timeout, "playing"]

        assert sp.pause() is True
        assert osascript.scripts[-1] == SCRIPT_PAUSE

    def test_position_accepts_comma_decimal(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_POSITION] = "12,5"

        assert sp.get_position() == 12.5

    @pytest.mark.parametrize("out", ["", "missing value", "-3"])
    def test_unusable_remaining_is_none(self, sp, osascript, out):
        osascript.answers[applescript_player.SCRIPT_REMAINING] = out

        assert sp.get_remaining() is None

    def test_length(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_LENGTH] = "215.3"

        assert sp.get_length() == 215.3

    def test_volume_reading_is_rounded_up_to_step(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_VOLUME] = "49"

        assert sp.get_volume() == 50

    def test_volume_unreadable_is_none(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_VOLUME] = OSError("boom")

        assert sp.get_volume() is None

    def test_track_and_artist(self, sp, osascript):
        osascript.answers[applescript_player.SCRIPT_TRACK] = "Song"
        osascript.answers[applescript_player.SCRIPT_ARTIST] = "Band"

        assert sp.get_track_name() == "Song"
        assert sp.get_artist_name() == "Band"


class TestSetVolume:
    def test_applies_quantized_value(self, sp, osascript):
        assert sp.set_volume(33) == 40
        assert osascript.scripts == [script_set_volume(40)]

    @pytest.mark.parametrize("value", [-1, 101, True, 50.0, "50"])
    def test_rejects_invalid_without_running_script(self, sp, osascript, value):
        assert sp.set_volume(value) is None
        assert osascript.scripts == []

    def test_failure_is_none(self, sp):
        with patch("subprocess.run", side_effect=OSError("boom")):
            assert sp.set_volume(40) is None


def test_player_never_raises_on_any_reading(sp):
    failing = MagicMock(side_effect=subprocess.TimeoutExpired(OSASCRIPT, 0.5))
    with patch("subprocess.run", failing):
        assert sp.get_position() is None
        assert sp.get_length() is None
        assert sp.get_remaining() is None
        assert sp.get_track_name() is None
        assert sp.play("spotify:track:x") is False
