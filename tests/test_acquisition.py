"""
Tests for AcquisitionOrchestrator, using a fake download process.
"""

import stat
import subprocess
from pathlib import Path

import pytest

from myuzik.core.acquisition import AcquisitionOrchestrator
from myuzik.exceptions import AcquisitionFailure, ExecutableNotFoundError

from .conftest import YOUTUBE_URL, FakeRunner

YT_DLP = Path("/usr/bin/yt-dlp")


def make_orchestrator(runner, storage_dir, **kwargs) -> AcquisitionOrchestrator:
    return AcquisitionOrchestrator(runner, lambda: YT_DLP, storage_dir, **kwargs)


class TestArguments:
    """Tests for the yt-dlp command line."""

    def test_command_line(self, orchestrator, runner, storage_dir) -> None:
        orchestrator.acquire(YOUTUBE_URL)
        command, timeout = runner.calls[0]
        assert command == [
            str(YT_DLP),
            "-x",
            "--audio-format",
            "mp3",
            "--audio-quality",
            "0",
            "-o",
            str(storage_dir / "%(title)s.%(ext)s"),
            "--no-simulate",
            "--print",
            "after_move:filepath",
            YOUTUBE_URL,
        ]
        assert timeout is None

    def test_invoked_once(self, orchestrator, runner) -> None:
        orchestrator.acquire(YOUTUBE_URL)
        assert len(runner.calls) == 1

    def test_custom_format_and_timeout(self, storage_dir) -> None:
        runner = FakeRunner(extension="ogg")
        orchestrator = make_orchestrator(
            runner,
            storage_dir,
            audio_format="vorbis",
            audio_quality="192K",
            extension="ogg",
            timeout=30,
        )
        song = orchestrator.acquire(YOUTUBE_URL)
        command, timeout = runner.calls[0]
        assert command[command.index("--audio-format") + 1] == "vorbis"
        assert command[command.index("--audio-quality") + 1] == "192K"
        assert timeout == 30
        assert song.name.endswith(".ogg")


class TestAcquire:
    """Tests for a successful acquisition."""

    def test_returns_song_for_downloaded_file(self, orchestrator, storage_dir) -> None:
        song = orchestrator.acquire(YOUTUBE_URL)
        expected = storage_dir / "Never Gonna Give You Up.mp3"
        assert song.name == "Never Gonna Give You Up.mp3"
        assert song.file_path == str(expected)
        assert Path(song.file_path).is_file()

    def test_creates_private_storage_dir(self, orchestrator, storage_dir) -> None:
        assert not storage_dir.exists()
        orchestrator.acquire(YOUTUBE_URL)
        assert stat.S_IMODE(storage_dir.stat().st_mode) == 0o700

    def test_existing_storage_dir_is_reused(self, orchestrator, storage_dir) -> None:
        storage_dir.mkdir()
        (storage_dir / "keep.mp3").write_bytes(b"")
        orchestrator.acquire(YOUTUBE_URL)
        assert (storage_dir / "keep.mp3").exists()

    def test_title_with_dots(self, storage_dir) -> None:
        runner = FakeRunner(title="Mr. Blue Sky (feat. E.L.O.)")
        song = make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)
        assert song.name == "Mr. Blue Sky (feat. E.L.O.).mp3"

    def test_uses_first_output_line(self, storage_dir) -> None:
        expected = storage_dir / "Never Gonna Give You Up.mp3"
        runner = FakeRunner(stdout=f"\n{expected}\nsomething else\n")
        song = make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)
        assert song.file_path == str(expected)

    def test_reported_extension_wins(self, storage_dir) -> None:
        runner = FakeRunner(extension="webm")
        song = make_orchestrator(runner, storage_dir, audio_format="opus").acquire(
            YOUTUBE_URL
        )
        assert song.name == "Never Gonna Give You Up.webm"
        assert Path(song.file_path).is_file()

    def test_reported_path_outside_storage(self, storage_dir, tmp_path) -> None:
        elsewhere = tmp_path / "elsewhere" / "Never Gonna Give You Up.mp3"
        runner = FakeRunner(stdout=f"{elsewhere}\n")
        song = make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)
        assert song.file_path == str(storage_dir / "Never Gonna Give You Up.mp3")


class TestFailures:
    """Tests for acquisition failures."""

    def test_non_zero_exit(self, storage_dir) -> None:
        runner = FakeRunner(returncode=1, stderr="ERROR: Video unavailable\n")
        with pytest.raises(AcquisitionFailure) as exc_info:
            make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)
        assert "Video unavailable" in str(exc_info.value)
        assert exc_info.value.detail == "ERROR: Video unavailable"

    def test_missing_output_file(self, storage_dir) -> None:
        runner = FakeRunner(create_file=False)
        with pytest.raises(AcquisitionFailure, match="File not found"):
            make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)

    def test_empty_output(self, storage_dir) -> None:
        runner = FakeRunner(stdout="")
        with pytest.raises(AcquisitionFailure):
            make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)

    def test_executable_cannot_start(self, storage_dir) -> None:
        runner = FakeRunner(error=FileNotFoundError(2, "No such file"))
        with pytest.raises(AcquisitionFailure, match="Could not run downloader"):
            make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)

    def test_timeout(self, storage_dir) -> None:
        runner = FakeRunner(error=subprocess.TimeoutExpired(["yt-dlp"], 5))
        with pytest.raises(AcquisitionFailure, match="timed out"):
            make_orchestrator(runner, storage_dir, timeout=5).acquire(YOUTUBE_URL)

    def test_executable_not_found(self, runner, storage_dir) -> None:
        def missing() -> Path:
            raise ExecutableNotFoundError("yt-dlp is not installed")

        orchestrator = AcquisitionOrchestrator(runner, missing, storage_dir)
        with pytest.raises(AcquisitionFailure):
            orchestrator.acquire(YOUTUBE_URL)
        assert runner.calls == []

    def test_integrity_check_rejects_non_audio(self, storage_dir) -> None:
        orchestrator = make_orchestrator(
            FakeRunner(), storage_dir, verify_integrity=True
        )
        with pytest.raises(AcquisitionFailure, match="integrity"):
            orchestrator.acquire(YOUTUBE_URL)

    def test_storage_dir_is_a_file(self, runner, storage_dir) -> None:
        storage_dir.write_text("", encoding="utf-8")
        with pytest.raises(AcquisitionFailure, match="Cannot create storage directory"):
            make_orchestrator(runner, storage_dir).acquire(YOUTUBE_URL)
        assert runner.calls == []
