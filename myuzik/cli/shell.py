"""
The interactive `myuzik>` prompt: reads one command per line and runs it to
completion before reading the next.
"""

import logging
import shlex
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from myuzik.core.session import LibrarySession
from myuzik.exceptions import InvalidInput, MyuzikError

from . import actions
from .formatters import format_error_with_suggestions, print_banner

log = logging.getLogger(__name__)

PROMPT = "[bold cyan]myuzik>[/bold cyan] "

COMMANDS = {
    "download": ("<url> [playlist]", "Download audio from YouTube into a playlist"),
    "list": ("", "List playlists"),
    "songs": ("<playlist>", "List songs in a playlist"),
    "search": ("<query>", "Search for songs and optionally play one"),
    "play": ("<playlist> <song>", "Play a song"),
    "export": ("<playlist> [directory]", "Export a playlist as M3U"),
    "help": ("", "Show this help"),
    "exit": ("", "Leave the shell"),
}

ALIASES = {
    "acquire": "download",
    "list-playlists": "list",
    "list-songs": "songs",
    "quit": "exit",
}


class Shell:
    """A read-eval-print loop over a LibrarySession."""

    def __init__(self, session: LibrarySession, console: Console):
        self.session = session
        self.console = console

    def run(self) -> None:
        print_banner(self.console)
        self.console.print("[dim]Type 'help' for a list of commands.[/dim]")
        while True:
            try:
                line = self.console.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return
            if not self.handle(line):
                return

    def handle(self, line: str) -> bool:
        """
        Runs one command line. Errors are reported and the loop continues.

        Returns:
            False when the shell should exit.
        """
        try:
            args = shlex.split(line)
        except ValueError as e:
            self._report(InvalidInput(f"Could not parse command: {e}"))
            return True
        if not args:
            return True

        name, *rest = args
        name = ALIASES.get(name.lower(), name.lower())
        if name == "exit":
            return False

        try:
            self.dispatch(name, rest)
        except MyuzikError as e:
            self._report(e)
        except EOFError:
            self.console.print("\n[yellow]Aborted.[/yellow]")
        return True

    def dispatch(self, name: str, args: list[str]) -> None:
        if name == "help":
            self.print_help()
        elif name == "download":
            self._require(name, args, 1)
            playlist_name = " ".join(args[1:]) or None
            actions.acquire(self.session, args[0], self.console, playlist_name)
        elif name == "list":
            actions.list_playlists(self.session, self.console)
        elif name == "songs":
            self._require(name, args, 1)
            actions.list_songs(self.session, " ".join(args), self.console)
        elif name == "search":
            self._require(name, args, 1)
            actions.search(self.session, " ".join(args), self.console)
        elif name == "play":
            self._require(name, args, 2)
            actions.play(self.session, args[0], " ".join(args[1:]), self.console)
        elif name == "export":
            self._require(name, args, 1)
            destination = Path(args[1]) if len(args) > 1 else Path.cwd()
            actions.export(self.session, args[0], destination, self.console)
        else:
            raise InvalidInput(f"Unknown command '{name}'. Type 'help' for usage.")

    def print_help(self) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="bold cyan")
        table.add_column(style="dim")
        table.add_column()
        for name, (usage, description) in COMMANDS.items():
            table.add_row(name, escape(usage), description)
        self.console.print(table)

    @staticmethod
    def _require(name: str, args: list[str], count: int) -> None:
        if len(args) < count:
            usage = COMMANDS[name][0]
            raise InvalidInput(f"Usage: {name} {usage}")

    def _report(self, error: MyuzikError) -> None:
        log.debug("Command failed:", exc_info=error)
        self.console.print(format_error_with_suggestions(error))
