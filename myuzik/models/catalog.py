"""
Pydantic models for the song catalog: songs, playlists and the library that
holds them. The library is the unit of persistence.
"""

from pydantic import BaseModel, Field, model_validator


class Song(BaseModel):
    """A downloaded audio file, identified by name within its playlist."""

    name: str = Field(..., min_length=1)
    file_path: str

    class Config:
        """Pydantic model configuration."""

        frozen = True


class Playlist(BaseModel):
    """An ordered list of songs. Duplicate song names are allowed."""

    name: str
    songs: list[Song] = Field(default_factory=list)


class Library(BaseModel):
    """All playlists, keyed by playlist name."""

    playlists: dict[str, Playlist] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_playlist_keys(self) -> "Library":
        """Ensures every playlist is stored under its own name."""
        for key, playlist in self.playlists.items():
            if key != playlist.name:
                raise ValueError(
                    f"Playlist stored under '{key}' is named '{playlist.name}'."
                )
        return self
