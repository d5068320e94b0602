"""
Provides a check that a downloaded file really contains decodable audio.
"""

import logging

from mutagen import File as MutagenFile
from mutagen import MutagenError

log = logging.getLogger(__name__)


class FileIntegrityChecker:
    """A collection of static methods for validating media file integrity."""

    @staticmethod
    def check_audio(filepath: str) -> bool:
        """
        Performs a basic integrity check on an audio file of any supported format.

        Checks if the file can be opened by mutagen and has valid stream info.

        Args:
            filepath: Path to the audio file.

        Returns:
            True if the file appears to be valid audio, False otherwise.
        """
        try:
            audio = MutagenFile(filepath)
        except (MutagenError, OSError) as e:
            log.warning(f"Integrity check failed for '{filepath}': {e}")
            return False

        if audio is None:
            log.warning(
                f"Integrity check failed for '{filepath}': Unrecognized audio format."
            )
            return False
        # A valid audio file should have stream info with a positive duration
        if audio.info and getattr(audio.info, "length", 0) > 0:
            return True
        log.warning(f"Integrity check failed for '{filepath}': No valid stream info.")
        return False
