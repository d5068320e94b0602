"""
The interactive session: the resident library plus everything needed to change it.
"""

import logging
from collections.abc import Sequence

from myuzik.core import library as ops
from myuzik.core.acquisition import AcquisitionOrchestrator
from myuzik.core.library import SearchResult
from myuzik.exceptions import InvalidInput
from myuzik.media.player import PlaybackLauncher
from myuzik.models.catalog import Library, Playlist, Song
from myuzik.storage.library_store import LibraryStore
from myuzik.utils.path import is_valid_source_url

log = logging.getLogger(__name__)


class LibrarySession:
    """
    Owns the in-memory library for one process and runs one command at a time.

    Every mutating command saves the whole library before returning. If a save
    fails the in-memory library is kept as is and the next mutation saves it
    again.
    """

    def __init__(
        self,
        library: Library,
        store: LibraryStore,
        orchestrator: AcquisitionOrchestrator,
        launcher: PlaybackLauncher,
    ):
        self.library = library
        self.store = store
        self.orchestrator = orchestrator
        self.launcher = launcher

    @classmethod
    def open(
        cls,
        store: LibraryStore,
        orchestrator: AcquisitionOrchestrator,
        launcher: PlaybackLauncher,
    ) -> "LibrarySession":
        """
        Loads the library and starts a session.

        Raises:
            CorruptStoreError: If the persisted library cannot be parsed.
        """
        return cls(store.load(), store, orchestrator, launcher)

    def acquire(self, source_url: str) -> Song:
        """Downloads a song without adding it to any playlist."""
        source_url = source_url.strip()
        if not is_valid_source_url(source_url):
            raise InvalidInput(f"Not a valid YouTube URL: '{source_url}'")
        return self.orchestrator.acquire(source_url)

    def add_song(self, playlist_name: str, song: Song) -> Playlist:
        """Catalogs a song under a playlist and saves the library."""
        playlist_name = playlist_name.strip()
        if not playlist_name:
            raise InvalidInput("Playlist name cannot be empty.")
        playlist = ops.catalog(self.library, playlist_name, song)
        log.debug(f"Added '{song.name}' to playlist '{playlist_name}'.")
        self.save()
        return playlist

    def acquire_into(self, source_url: str, playlist_name: str) -> Song:
        """Downloads a song and catalogs it in one step."""
        if not playlist_name.strip():
            raise InvalidInput("Playlist name cannot be empty.")
        song = self.acquire(source_url)
        self.add_song(playlist_name, song)
        return song

    def save(self) -> None:
        self.store.save(self.library)

    def list_playlists(self) -> list[tuple[str, int]]:
        return ops.list_playlists(self.library)

    def get_playlist(self, playlist_name: str) -> Playlist:
        return ops.get_playlist(self.library, playlist_name)

    def list_songs(self, playlist_name: str) -> list[Song]:
        return ops.list_songs(self.library, playlist_name)

    def search(self, query: str) -> list[SearchResult]:
        return ops.search(self.library, query)

    def play(self, playlist_name: str, song_name: str) -> str:
        """Starts playback of a song and returns the path handed to the player."""
        file_path = ops.resolve_playable(self.library, playlist_name, song_name)
        self.launcher.launch(file_path)
        return file_path

    @staticmethod
    def select(results: Sequence[SearchResult], selection: str) -> SearchResult:
        """
        Picks a search result by its 1-based position.

        Raises:
            InvalidInput: If the selection is not a number within range.
        """
        try:
            index = int(selection.strip())
        except ValueError:
            raise InvalidInput(f"Not a valid selection: '{selection}'") from None
        if not 1 <= index <= len(results):
            raise InvalidInput(
                f"Selection must be between 1 and {len(results)}, got {index}."
            )
        return results[index - 1]
