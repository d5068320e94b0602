"""
Functions for formatting and displaying data in the console using Rich.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from myuzik.core.library import SearchResult
from myuzik.models.catalog import Song
from myuzik.models.config import LibraryConfig, get_format_info
from myuzik.utils.formatting import format_size

BANNER = r"""
 __  __                 _ _
|  \/  |               (_) |
| \  / |_   _ _   _ ___| | | __
| |\/| | | | | | | |_  / | |/ /
| |  | | |_| | |_| |/ /| |   <
|_|  |_|\__, |\__,_/___|_|_|\_\
         __/ |
        |___/
"""


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "CorruptStoreError": [
            "• The library file was left untouched.",
            "• Repair the JSON by hand, or move the file aside to start fresh.",
        ],
        "PersistenceError": [
            "• Check that the library location is writable and the disk is not full.",
            "• Your changes are kept in memory and will be saved on the next change.",
        ],
        "ExecutableNotFoundError": [
            "• Install yt-dlp and make sure it is on your PATH.",
            "• Or set 'downloader_path' in the configuration file.",
        ],
        "AcquisitionFailure": [
            "• Check the video URL and your internet connection.",
            "• yt-dlp needs ffmpeg installed to extract audio.",
            "• An outdated yt-dlp often fails on YouTube; update it.",
        ],
        "PlaylistNotFound": [
            "• Run `myuzik list-playlists` to see existing playlists.",
        ],
        "SongNotFound": [
            "• Run `myuzik list-songs <playlist>` to see the songs it contains.",
        ],
        "InvalidInput": [
            "• URLs must point at youtube.com or youtu.be.",
        ],
        "PlaybackError": [
            "• Set 'player_command' in the configuration file to your player.",
        ],
        "ConfigurationError": [
            "• Run `myuzik --show-config` to inspect the settings.",
            "• Run `myuzik init --force` to recreate the configuration file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)
    if detail := getattr(error, "detail", ""):
        if detail not in error_msg:
            error_text.append(f"\n{detail}", style="dim")

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_banner(console: Console):
    console.print(Text(BANNER, style="bright_cyan"))


def print_config(config_path: Path, config_data: dict[str, Any], console: Console):
    """Displays the current configuration."""
    content = ""
    for key, value in config_data.items():
        if key == "config_path":
            continue
        if value == "":
            value = "[dim](auto)[/dim]"
        else:
            value = escape(str(value))
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def print_playlists(playlists: Sequence[tuple[str, int]], console: Console):
    """Displays every playlist with its song count."""
    if not playlists:
        console.print(
            "[yellow]No playlists yet.[/yellow] Try [cyan]myuzik acquire <URL>[/cyan]"
        )
        return

    table = Table(title="Playlists", box=box.ROUNDED, title_style="bold green")
    table.add_column("Playlist", style="yellow")
    table.add_column("Songs", justify="right")
    for name, count in playlists:
        table.add_row(escape(name), str(count))
    console.print(table)


def _song_size(song: Song) -> str:
    path = Path(song.file_path)
    if not path.is_file():
        return "[red]missing[/red]"
    return format_size(path.stat().st_size)


def print_songs(playlist_name: str, songs: Sequence[Song], console: Console):
    """Displays the songs of a playlist, numbered from 1."""
    table = Table(
        title=f"Songs in playlist '{escape(playlist_name)}'",
        box=box.ROUNDED,
        title_style="bold green",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Song")
    table.add_column("Size", justify="right")
    for i, song in enumerate(songs, 1):
        table.add_row(str(i), escape(song.name), _song_size(song))
    console.print(table)


def print_search_results(query: str, results: Sequence[SearchResult], console: Console):
    """Displays numbered search results so one can be picked for playback."""
    if not results:
        console.print(f"[yellow]No songs match '{escape(query)}'.[/yellow]")
        return

    table = Table(title="Search results", box=box.ROUNDED, title_style="bold green")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Song")
    table.add_column("Playlist", style="yellow")
    for i, (playlist_name, song) in enumerate(results, 1):
        table.add_row(str(i), escape(song.name), escape(playlist_name))
    console.print(table)


def print_settings_table(config: LibraryConfig, console: Console):
    """Displays a summary of the effective settings."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    format_info = get_format_info(config.audio_format)
    table.add_row(
        "Audio Format:",
        f"[{format_info['color']}]{format_info['name']}[/] (quality {config.audio_quality})",
    )
    table.add_row("Storage:", escape(str(config.storage_path())))
    table.add_row("Library:", escape(str(config.library_path())))
    table.add_row(
        "Download Timeout:",
        f"{config.download_timeout}s" if config.download_timeout else "none",
    )
    table.add_row("Player:", escape(config.player_command) or "[dim]system default[/dim]")
    console.print(table)
