"""
Utilities for handling file paths, directories, and URL validation.
"""

import re
from pathlib import Path

from pathvalidate import sanitize_filename

PRIVATE_DIR_MODE = 0o700

_YOUTUBE_URL_RE = re.compile(
    r"^(https?://)?(www\.|m\.|music\.)?(youtube\.com|youtu\.be)/.+"
)


def is_valid_source_url(url: str) -> bool:
    """Checks that a URL points at YouTube."""
    return bool(_YOUTUBE_URL_RE.match(url.strip()))


def create_private_dir(directory_path: Path) -> bool:
    """
    Creates a directory readable only by its owner, if it does not already exist.

    Returns:
        True if the directory was created by this call.
    """
    if directory_path.is_dir():
        return False
    directory_path.mkdir(parents=True, exist_ok=True)
    # mkdir's mode is filtered by the umask, so set it explicitly
    directory_path.chmod(PRIVATE_DIR_MODE)
    return True


def playlist_filename(playlist_name: str, extension: str) -> str:
    """Builds a safe file name for an exported playlist."""
    stem = sanitize_filename(playlist_name, platform="universal") or "playlist"
    return f"{stem}.{extension}"
