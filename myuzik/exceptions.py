"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class MyuzikError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(MyuzikError):
    """Raised for issues related to configuration loading or validation."""


class CorruptStoreError(MyuzikError):
    """
    Raised when the persisted library exists but cannot be read or parsed.
    The file is left untouched so the user can repair it.
    """


class PersistenceError(MyuzikError):
    """Raised when the library cannot be written to disk."""


class AcquisitionFailure(MyuzikError):
    """Raised when audio could not be downloaded from a source URL."""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.detail = detail


class ExecutableNotFoundError(AcquisitionFailure):
    """Raised when the external download executable cannot be located or fetched."""


class LookupMiss(MyuzikError):
    """Base class for catalog lookups that found nothing."""


class PlaylistNotFound(LookupMiss):
    """Raised when a playlist name is not present in the library."""

    def __init__(self, playlist_name: str):
        super().__init__(f"Playlist not found: '{playlist_name}'")
        self.playlist_name = playlist_name


class SongNotFound(LookupMiss):
    """Raised when a playlist does not contain a song with the given name."""

    def __init__(self, playlist_name: str, song_name: str):
        super().__init__(f"Song '{song_name}' not found in playlist '{playlist_name}'")
        self.playlist_name = playlist_name
        self.song_name = song_name


class InvalidInput(MyuzikError):
    """Raised for malformed user input, before any side effect takes place."""


class PlaybackError(MyuzikError):
    """Raised when the external player cannot be launched."""
