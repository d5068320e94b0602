"""
Operations on the song library: cataloging, enumeration, search and lookup.

Each function takes the library explicitly and either queries it or mutates it
in place. None of them touch the disk or spawn processes.
"""

from typing import NamedTuple

from myuzik.exceptions import PlaylistNotFound, SongNotFound
from myuzik.models.catalog import Library, Playlist, Song


class SearchResult(NamedTuple):
    """A song matched by a search, along with the playlist it was found in."""

    playlist_name: str
    song: Song


def catalog(library: Library, playlist_name: str, song: Song) -> Playlist:
    """
    Appends a song to a playlist, creating the playlist if it does not exist.

    Returns:
        The playlist the song was added to.
    """
    playlist = library.playlists.get(playlist_name)
    if playlist is None:
        playlist = Playlist(name=playlist_name)
        library.playlists[playlist_name] = playlist
    playlist.songs.append(song)
    return playlist


def list_playlists(library: Library) -> list[tuple[str, int]]:
    """Returns (name, song count) for every playlist, in storage order."""
    return [(name, len(playlist.songs)) for name, playlist in library.playlists.items()]


def get_playlist(library: Library, playlist_name: str) -> Playlist:
    """Looks up a playlist by name, raising PlaylistNotFound if it is absent."""
    try:
        return library.playlists[playlist_name]
    except KeyError:
        raise PlaylistNotFound(playlist_name) from None


def list_songs(library: Library, playlist_name: str) -> list[Song]:
    """Returns the songs of a playlist in insertion order."""
    return list(get_playlist(library, playlist_name).songs)


def search(library: Library, query: str) -> list[SearchResult]:
    """
    Finds songs whose name contains the query, ignoring case.

    Results follow playlist order, then song order within each playlist.
    """
    needle = query.casefold()
    return [
        SearchResult(playlist_name, song)
        for playlist_name, playlist in library.playlists.items()
        for song in playlist.songs
        if needle in song.name.casefold()
    ]


def resolve_playable(library: Library, playlist_name: str, song_name: str) -> str:
    """
    Returns the file path of the first song in a playlist with an exactly
    matching name.
    """
    playlist = get_playlist(library, playlist_name)
    for song in playlist.songs:
        if song.name == song_name:
            return song.file_path
    raise SongNotFound(playlist_name, song_name)
