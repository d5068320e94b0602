"""
Defines the command-line interface for the application using Typer.
"""

import logging
import os
import shlex
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from myuzik import __version__
from myuzik.core.acquisition import AcquisitionOrchestrator
from myuzik.core.session import LibrarySession
from myuzik.exceptions import MyuzikError
from myuzik.media.executable import ExecutableResolver, get_cache_dir
from myuzik.media.player import SystemPlayer, default_player_command
from myuzik.media.process import SubprocessRunner
from myuzik.models.config import LibraryConfig
from myuzik.storage.config_manager import ConfigManager
from myuzik.storage.library_store import LibraryStore

from . import actions
from .formatters import format_error_with_suggestions, print_config, print_settings_table
from .shell import Shell

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("myuzik")

app = typer.Typer(
    name="myuzik",
    help=(
        "Download YouTube audio and manage playlists. Use 'myuzik <command> --help'"
        " for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if override := os.getenv("MYUZIK_CONFIG_DIR"):
        return Path(override).expanduser()
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "myuzik"


def get_config_file() -> Path:
    return get_config_dir() / "config.ini"


def load_config() -> LibraryConfig:
    return ConfigManager(get_config_file()).load_config()


def build_session(config: LibraryConfig) -> LibrarySession:
    """
    Wires the library store, the acquisition pipeline, and the player together
    and loads the library.

    Raises:
        CorruptStoreError: If the persisted library cannot be parsed.
    """
    resolver = ExecutableResolver(
        get_cache_dir(),
        configured_path=config.downloader_path,
        auto_fetch=config.auto_fetch_downloader,
    )
    orchestrator = AcquisitionOrchestrator(
        SubprocessRunner(),
        resolver,
        config.storage_path(),
        audio_format=config.audio_format,
        audio_quality=config.audio_quality,
        extension=config.extension,
        timeout=config.download_timeout or None,
        verify_integrity=config.verify_integrity,
    )
    return LibrarySession.open(
        LibraryStore(config.library_path()),
        orchestrator,
        SystemPlayer(config.player_command),
    )


@contextmanager
def report_errors() -> Iterator[None]:
    """Prints application errors as a panel and exits with status 1."""
    try:
        yield
    except MyuzikError as e:
        log.debug("Full traceback:", exc_info=True)
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


def open_session() -> LibrarySession:
    with report_errors():
        return build_session(load_config())


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """myuzik: a YouTube audio library in your terminal."""
    if version:
        console.print(f"[bold]myuzik[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("myuzik").setLevel(log_level)

    if show_config:
        config_file = get_config_file()
        with report_errors():
            config = load_config()
        if not config_file.is_file():
            console.print("[dim]No configuration file found; showing defaults.[/dim]")
        print_config(config_file, config.model_dump(), console)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    storage_dir: str | None = typer.Option(
        None, "--storage-dir", help="Directory downloaded audio is stored in."
    ),
    library_file: str | None = typer.Option(
        None, "--library-file", help="Location of the playlist library document."
    ),
    audio_format: str | None = typer.Option(
        None, "--format", "-f", help="Audio format: mp3, m4a, opus, flac, ..."
    ),
    audio_quality: str | None = typer.Option(
        None, "--quality", "-q", help="0 (best) to 10, or a bitrate such as 192K."
    ),
    player_command: str | None = typer.Option(
        None, "--player", help="Command used to play songs (file path is appended)."
    ),
    downloader_path: str | None = typer.Option(
        None, "--downloader", help="Path to a yt-dlp executable."
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing configuration without asking."
    ),
):
    """Create the configuration file."""
    config_file = get_config_file()
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        key: value
        for key, value in {
            "storage_dir": storage_dir,
            "library_file": library_file,
            "audio_format": audio_format,
            "audio_quality": audio_quality,
            "player_command": player_command,
            "downloader_path": downloader_path,
        }.items()
        if value is not None
    }
    with report_errors():
        ConfigManager(config_file).save_new_config(settings)
    console.print(f"\n[bold green]✓ Configuration saved to '{config_file}'[/bold green]")
    console.print("Ready! Try: [cyan]myuzik acquire <URL>[/cyan]")


@app.command()
def acquire(
    url: str = typer.Argument(..., help="YouTube video URL."),
    playlist: str | None = typer.Option(
        None, "--playlist", "-p", help="Playlist to add the song to (prompted if omitted)."
    ),
):
    """Download audio from YouTube and add it to a playlist."""
    session = open_session()
    with report_errors():
        actions.acquire(session, url, console, playlist)


@app.command(name="list-playlists")
def list_playlists():
    """List playlists."""
    session = open_session()
    actions.list_playlists(session, console)


@app.command(name="list-songs")
def list_songs(playlist: str = typer.Argument(..., help="Playlist name.")):
    """List songs in a playlist."""
    session = open_session()
    with report_errors():
        actions.list_songs(session, playlist, console)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in song names."),
    play: bool = typer.Option(
        True, "--play/--no-play", help="Offer to play one of the results."
    ),
):
    """Search for songs across all playlists."""
    session = open_session()
    with report_errors():
        actions.search(session, query, console, offer_play=play)


@app.command()
def play(
    playlist: str = typer.Argument(..., help="Playlist name."),
    song: str = typer.Argument(..., help="Song name, as shown by list-songs."),
):
    """Play a song with the configured player."""
    session = open_session()
    with report_errors():
        actions.play(session, playlist, song, console)


@app.command()
def export(
    playlist: str = typer.Argument(..., help="Playlist name."),
    dest: Path = typer.Option(  # noqa: B008
        Path("."), "--dest", "-d", help="Directory to write the M3U file to."
    ),
):
    """Export a playlist as an M3U file."""
    session = open_session()
    with report_errors():
        actions.export(session, playlist, dest, console)


@app.command()
def shell():
    """Start the interactive prompt."""
    session = open_session()
    Shell(session, console).run()


@app.command()
def diagnose():
    """Diagnose common configuration and setup issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False

    config_file = get_config_file()
    if config_file.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{config_file}[/dim]")
    else:
        console.print("[yellow]○[/] No config file; defaults are used.")

    try:
        config = load_config()
        console.print("[green]✓[/] Configuration is valid.")
    except MyuzikError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e
    print_settings_table(config, console)
    console.print()

    try:
        library = LibraryStore(config.library_path()).load()
        console.print(
            f"[green]✓[/] Library loads ({len(library.playlists)} playlists)."
        )
    except MyuzikError as e:
        console.print(f"[red]✗ Library cannot be loaded: {e}[/red]")
        issues_found = True

    resolver = ExecutableResolver(
        get_cache_dir(), configured_path=config.downloader_path, auto_fetch=False
    )
    try:
        console.print(f"[green]✓[/] yt-dlp found at: [dim]{resolver.resolve()}[/dim]")
    except MyuzikError:
        if config.auto_fetch_downloader:
            console.print("[yellow]○[/] yt-dlp not found; it will be downloaded on first use.")
        else:
            console.print("[red]✗ yt-dlp not found and automatic download is disabled.[/red]")
            issues_found = True

    if shutil.which("ffmpeg"):
        console.print("[green]✓[/] ffmpeg is installed.")
    else:
        console.print("[red]✗ ffmpeg not found; yt-dlp needs it to extract audio.[/red]")
        issues_found = True

    if config.player_command:
        player = shlex.split(config.player_command, posix=os.name != "nt")[0]
    else:
        player = default_player_command()[0]
    if shutil.which(player):
        console.print(f"[green]✓[/] Player command available: [dim]{player}[/dim]")
    else:
        console.print(f"[red]✗ Player command not found: {player}[/red]")
        issues_found = True

    console.print()
    if not issues_found:
        console.print("[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n")
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
