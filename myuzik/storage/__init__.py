"""
Storage Layer.

This package handles all data persistence: the configuration file and the
JSON library document.
"""

from .config_manager import ConfigManager
from .library_store import LibraryStore

__all__ = ["ConfigManager", "LibraryStore"]
