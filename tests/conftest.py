"""
Shared fixtures and test doubles for the external download and player processes.
"""

from pathlib import Path

import pytest

from myuzik.core.acquisition import AcquisitionOrchestrator
from myuzik.core.session import LibrarySession
from myuzik.media.process import ProcessResult
from myuzik.models.catalog import Library, Song
from myuzik.storage.library_store import LibraryStore

YOUTUBE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class FakeRunner:
    """Stands in for yt-dlp: writes the output file and prints its path."""

    def __init__(
        self,
        title: str = "Never Gonna Give You Up",
        returncode: int = 0,
        stderr: str = "",
        create_file: bool = True,
        stdout: str | None = None,
        extension: str = "mp3",
        error: Exception | None = None,
    ):
        self.title = title
        self.returncode = returncode
        self.stderr = stderr
        self.create_file = create_file
        self.stdout = stdout
        self.extension = extension
        self.error = error
        self.calls: list[tuple[list[str], float | None]] = []

    def run(self, command: list[str], timeout: float | None = None) -> ProcessResult:
        self.calls.append((command, timeout))
        if self.error is not None:
            raise self.error

        template = command[command.index("-o") + 1]
        output = Path(
            template.replace("%(title)s", self.title).replace("%(ext)s", self.extension)
        )
        if self.returncode == 0 and self.create_file:
            output.write_bytes(b"not really audio")

        stdout = self.stdout
        if stdout is None:
            stdout = f"{output}\n" if self.returncode == 0 else ""
        return ProcessResult(self.returncode, stdout, self.stderr)


class FakeLauncher:
    """Records the paths it was asked to play."""

    def __init__(self):
        self.launched: list[str] = []

    def launch(self, file_path: str) -> None:
        self.launched.append(file_path)


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path / "storage"


@pytest.fixture
def library_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".myuzik.json"


@pytest.fixture
def store(library_path: Path) -> LibraryStore:
    return LibraryStore(library_path)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def orchestrator(runner: FakeRunner, storage_dir: Path) -> AcquisitionOrchestrator:
    return AcquisitionOrchestrator(
        runner, lambda: Path("/usr/bin/yt-dlp"), storage_dir
    )


@pytest.fixture
def session(
    store: LibraryStore,
    orchestrator: AcquisitionOrchestrator,
    launcher: FakeLauncher,
) -> LibrarySession:
    return LibrarySession.open(store, orchestrator, launcher)


@pytest.fixture
def road_trip() -> Library:
    """A library with one playlist of two songs and one of a single song."""
    from myuzik.core.library import catalog

    library = Library()
    catalog(library, "road-trip", Song(name="song-a.mp3", file_path="/store/song-a.mp3"))
    catalog(library, "road-trip", Song(name="song-b.mp3", file_path="/store/song-b.mp3"))
    catalog(library, "focus", Song(name="Ambient Song.mp3", file_path="/store/ambient.mp3"))
    return library
