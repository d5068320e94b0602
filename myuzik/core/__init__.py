"""
Core application engine for the song library.

`library` holds the pure operations on the catalog, `acquisition` drives the
download executable, and `LibrarySession` ties them to persistence so that
every change is saved before the next command runs.
"""

from .acquisition import AcquisitionOrchestrator
from .session import LibrarySession

__all__ = ["AcquisitionOrchestrator", "LibrarySession"]
