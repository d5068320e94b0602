"""
Console front-ends for the library operations, shared by the Typer commands
and the interactive shell.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from myuzik.core.session import LibrarySession
from myuzik.models.catalog import Song
from myuzik.utils.playlist import export_m3u

from .formatters import print_playlists, print_search_results, print_songs

log = logging.getLogger(__name__)


def ask_playlist_name(console: Console) -> str:
    """Prompts until a non-blank playlist name is entered."""
    while True:
        name = Prompt.ask("Enter playlist name to store the song", console=console)
        if name.strip():
            return name.strip()
        console.print("[red]✗ Playlist name cannot be empty.[/red]")


def acquire(
    session: LibrarySession,
    url: str,
    console: Console,
    playlist_name: str | None = None,
) -> Song:
    """Downloads a song, asks for a playlist if none was given, and catalogs it."""
    cataloged = bool(playlist_name and playlist_name.strip())
    with console.status("[blue]Downloading audio...[/blue]"):
        if cataloged:
            song = session.acquire_into(url, playlist_name)
        else:
            song = session.acquire(url)
    console.print(f"[green]✓ Download complete:[/green] {escape(song.name)}")

    if not cataloged:
        playlist_name = ask_playlist_name(console)
        session.add_song(playlist_name, song)

    console.print(
        f"[green]✓ Added to playlist[/green] [yellow]{escape(playlist_name.strip())}[/yellow]"
    )
    return song


def list_playlists(session: LibrarySession, console: Console) -> None:
    print_playlists(session.list_playlists(), console)


def list_songs(session: LibrarySession, playlist_name: str, console: Console) -> None:
    print_songs(playlist_name, session.list_songs(playlist_name), console)


def play(
    session: LibrarySession, playlist_name: str, song_name: str, console: Console
) -> None:
    console.print(f"[blue]Playing[/blue] {escape(song_name)}...")
    session.play(playlist_name, song_name)


def search(
    session: LibrarySession, query: str, console: Console, offer_play: bool = True
) -> None:
    """Shows matching songs and optionally plays the one the user picks."""
    results = session.search(query)
    print_search_results(query, results, console)
    if not results or not offer_play:
        return

    selection = Prompt.ask(
        "Enter the number of the song to play (or press Enter to cancel)",
        console=console,
        default="",
        show_default=False,
    )
    if not selection.strip():
        return
    playlist_name, song = session.select(results, selection)
    play(session, playlist_name, song.name, console)


def export(
    session: LibrarySession, playlist_name: str, destination: Path, console: Console
) -> Path:
    playlist = session.get_playlist(playlist_name)
    path = export_m3u(playlist, destination)
    console.print(
        f"[green]✓ Exported {len(playlist.songs)} songs to[/green] "
        f"[dim]{escape(str(path))}[/dim]"
    )
    return path
