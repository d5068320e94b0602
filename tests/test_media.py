"""
Tests for the player launcher, the executable resolver and the integrity check.
"""

import stat
import sys
from pathlib import Path

import pytest

from myuzik.exceptions import ExecutableNotFoundError, PlaybackError
from myuzik.media import executable
from myuzik.media.executable import ExecutableResolver, release_asset_name
from myuzik.media.integrity import FileIntegrityChecker
from myuzik.media.player import SystemPlayer, default_player_command


class TestSystemPlayer:
    """Tests for SystemPlayer."""

    def test_configured_command(self) -> None:
        player = SystemPlayer("mpv --no-video")
        assert player.command_for("/music/a b.mp3") == ["mpv", "--no-video", "/music/a b.mp3"]

    def test_default_command(self) -> None:
        player = SystemPlayer()
        assert player.command_for("/music/a.mp3") == [*default_player_command(), "/music/a.mp3"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(PlaybackError):
            SystemPlayer("true").launch(str(tmp_path / "gone.mp3"))

    def test_missing_player(self, tmp_path) -> None:
        song = tmp_path / "a.mp3"
        song.write_bytes(b"")
        with pytest.raises(PlaybackError):
            SystemPlayer("definitely-not-a-real-player-xyz").launch(str(song))


class TestExecutableResolver:
    """Tests for locating yt-dlp."""

    def test_configured_path(self, tmp_path) -> None:
        binary = tmp_path / "yt-dlp"
        binary.write_bytes(b"")
        resolver = ExecutableResolver(tmp_path / "cache", configured_path=str(binary))
        assert resolver.resolve() == binary

    def test_configured_path_missing(self, tmp_path) -> None:
        resolver = ExecutableResolver(
            tmp_path / "cache", configured_path=str(tmp_path / "nope")
        )
        with pytest.raises(ExecutableNotFoundError):
            resolver.resolve()

    def test_found_on_path(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(executable.shutil, "which", lambda name: "/opt/bin/yt-dlp")
        assert ExecutableResolver(tmp_path).resolve() == Path("/opt/bin/yt-dlp")

    def test_cached_copy(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(executable.shutil, "which", lambda name: None)
        cached = tmp_path / release_asset_name()
        cached.write_bytes(b"")
        assert ExecutableResolver(tmp_path, auto_fetch=False).resolve() == cached

    def test_not_found_without_auto_fetch(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(executable.shutil, "which", lambda name: None)
        with pytest.raises(ExecutableNotFoundError):
            ExecutableResolver(tmp_path, auto_fetch=False).resolve()

    def test_fetches_once(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(executable.shutil, "which", lambda name: None)
        fetched: list[Path] = []

        async def fake_fetch(self, destination: Path) -> None:
            fetched.append(destination)
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(b"#!/bin/sh\n")
            destination.chmod(0o700)

        monkeypatch.setattr(ExecutableResolver, "fetch", fake_fetch)
        resolver = ExecutableResolver(tmp_path / "cache")
        first = resolver.resolve()
        second = resolver.resolve()
        assert first == second == tmp_path / "cache" / release_asset_name()
        assert len(fetched) == 1
        assert stat.S_IMODE(first.stat().st_mode) == 0o700

    def test_fetch_failure(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(executable.shutil, "which", lambda name: None)

        async def failing_fetch(self, destination: Path) -> None:
            raise OSError("network unreachable")

        monkeypatch.setattr(ExecutableResolver, "fetch", failing_fetch)
        with pytest.raises(ExecutableNotFoundError, match="network unreachable"):
            ExecutableResolver(tmp_path / "cache").resolve()

    def test_cache_dir_honors_xdg(self, tmp_path, monkeypatch) -> None:
        if sys.platform == "win32":
            pytest.skip("XDG layout only")
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        assert executable.get_cache_dir() == tmp_path / "myuzik"


class TestFileIntegrityChecker:
    """Tests for the audio integrity check."""

    def test_rejects_non_audio(self, tmp_path) -> None:
        junk = tmp_path / "junk.mp3"
        junk.write_bytes(b"this is not audio")
        assert FileIntegrityChecker.check_audio(str(junk)) is False

    def test_rejects_missing_file(self, tmp_path) -> None:
        assert FileIntegrityChecker.check_audio(str(tmp_path / "missing.mp3")) is False
