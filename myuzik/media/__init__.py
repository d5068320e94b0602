"""
Media Processing Layer.

This package wraps every external program the application drives: the yt-dlp
download executable, the audio player, and audio integrity validation.
"""

from .executable import ExecutableResolver
from .integrity import FileIntegrityChecker
from .player import PlaybackLauncher, SystemPlayer
from .process import AcquisitionRunner, ProcessResult, SubprocessRunner

__all__ = [
    "AcquisitionRunner",
    "ExecutableResolver",
    "FileIntegrityChecker",
    "PlaybackLauncher",
    "ProcessResult",
    "SubprocessRunner",
    "SystemPlayer",
]
