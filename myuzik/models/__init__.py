"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application: the song catalog and the configuration.
"""

from .catalog import Library, Playlist, Song
from .config import LibraryConfig

__all__ = ["Library", "LibraryConfig", "Playlist", "Song"]
