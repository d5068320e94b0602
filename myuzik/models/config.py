"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Audio formats accepted by yt-dlp's --audio-format, with display metadata
AUDIO_FORMATS = {
    "mp3": {"name": "MP3", "ext": "mp3", "color": "yellow"},
    "m4a": {"name": "AAC (M4A)", "ext": "m4a", "color": "cyan"},
    "aac": {"name": "AAC", "ext": "aac", "color": "cyan"},
    "opus": {"name": "Opus", "ext": "opus", "color": "magenta"},
    "vorbis": {"name": "Ogg Vorbis", "ext": "ogg", "color": "magenta"},
    "flac": {"name": "FLAC", "ext": "flac", "color": "green"},
    "wav": {"name": "WAV", "ext": "wav", "color": "green"},
}

DEFAULT_LIBRARY_FILE = "~/.myuzik.json"
DEFAULT_STORAGE_DIR = "storage"

_BITRATE_RE = re.compile(r"^\d{2,3}[kK]$")


def get_format_info(audio_format: str) -> dict[str, str]:
    """Gets the display information for an audio format from the central map."""
    return AUDIO_FORMATS.get(
        audio_format,
        {"name": "Unknown", "ext": audio_format, "color": "white"},
    )


class LibraryConfig(BaseModel):
    """A validated configuration model for the application."""

    # Storage
    storage_dir: str = DEFAULT_STORAGE_DIR
    library_file: str = DEFAULT_LIBRARY_FILE

    # Acquisition
    audio_format: str = "mp3"
    audio_quality: str = "0"
    downloader_path: str = ""
    auto_fetch_downloader: bool = True
    download_timeout: int = 0
    verify_integrity: bool = True

    # Playback
    player_command: str = ""

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        """Ensures the audio format is one yt-dlp can extract to."""
        v = v.lower()
        if v not in AUDIO_FORMATS:
            raise ValueError(
                f"Audio format must be one of: {', '.join(sorted(AUDIO_FORMATS))}."
            )
        return v

    @field_validator("audio_quality")
    @classmethod
    def validate_audio_quality(cls, v: str) -> str:
        """Accepts a VBR level from 0 (best) to 10 or a bitrate such as 192K."""
        if v.isdigit() and 0 <= int(v) <= 10:
            return v
        if _BITRATE_RE.match(v):
            return v.upper()
        raise ValueError(
            "Audio quality must be 0 (best) to 10 (worst) or a bitrate like 192K."
        )

    @field_validator("download_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """A timeout of zero disables the limit."""
        if v < 0:
            raise ValueError("Download timeout cannot be negative.")
        return v

    @field_validator("storage_dir", "library_file")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Path settings cannot be empty.")
        return v

    @property
    def extension(self) -> str:
        """File extension produced by the configured audio format."""
        return get_format_info(self.audio_format)["ext"]

    def storage_path(self) -> Path:
        """Storage directory, resolved against the current working directory."""
        return Path(self.storage_dir).expanduser().absolute()

    def library_path(self) -> Path:
        """Location of the persisted library document."""
        return Path(self.library_file).expanduser()

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
