"""
Persists the song library as a single JSON document in the user's home directory.
"""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from myuzik.exceptions import CorruptStoreError, PersistenceError
from myuzik.models.catalog import Library

log = logging.getLogger(__name__)


class LibraryStore:
    """
    Loads and saves the whole library at a fixed location.

    Every save rewrites the entire document through a temporary file and an
    atomic rename, so the previous document survives a failed write.
    """

    FILE_MODE = 0o600

    def __init__(self, library_path: Path):
        self.library_path = library_path

    def load(self) -> Library:
        """
        Reads the library from disk. A missing file yields an empty library.

        Raises:
            CorruptStoreError: If the file exists but cannot be read or parsed.
        """
        if not self.library_path.exists():
            log.debug(f"No library at '{self.library_path}', starting empty.")
            return Library()

        try:
            raw = self.library_path.read_bytes()
        except OSError as e:
            raise CorruptStoreError(
                f"Cannot read library file '{self.library_path}': {e}"
            ) from e

        try:
            library = Library.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptStoreError(
                f"Library file '{self.library_path}' is corrupt and was not loaded. "
                f"Fix or move it aside before running again.\n{e}"
            ) from e

        log.debug(
            f"Loaded {len(library.playlists)} playlists from '{self.library_path}'."
        )
        return library

    def save(self, library: Library) -> None:
        """
        Writes the entire library to disk, replacing the previous document.

        Raises:
            PersistenceError: If the document cannot be written.
        """
        payload = library.model_dump_json(indent=2) + "\n"
        directory = self.library_path.parent
        temp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{self.library_path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(temp_name, self.FILE_MODE)
            os.replace(temp_name, self.library_path)
            temp_name = None
        except OSError as e:
            raise PersistenceError(
                f"Failed to save library to '{self.library_path}': {e}"
            ) from e
        finally:
            if temp_name and os.path.exists(temp_name):
                try:
                    os.remove(temp_name)
                except OSError:
                    pass

        log.debug(f"Saved library to '{self.library_path}'.")
