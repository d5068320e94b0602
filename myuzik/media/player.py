"""
Launches an external audio player for a song, without waiting for it to finish.
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Protocol

from myuzik.exceptions import PlaybackError

log = logging.getLogger(__name__)


class PlaybackLauncher(Protocol):
    """Hands a file path to a player process."""

    def launch(self, file_path: str) -> None: ...


def default_player_command() -> list[str]:
    """
    Returns the platform's "open with the default application" command.
    The file path is appended as the final argument.
    """
    if os.name == "nt":
        # The empty string is the window title consumed by 'start'.
        return ["cmd", "/C", "start", ""]
    if sys.platform == "darwin":
        return ["open"]
    return [shutil.which("xdg-open") or "xdg-open"]


class SystemPlayer:
    """A PlaybackLauncher that spawns the configured or platform default player."""

    def __init__(self, player_command: str = ""):
        self.player_command = player_command

    def command_for(self, file_path: str) -> list[str]:
        if self.player_command:
            base = shlex.split(self.player_command, posix=os.name != "nt")
        else:
            base = default_player_command()
        return [*base, file_path]

    def launch(self, file_path: str) -> None:
        if not Path(file_path).is_file():
            raise PlaybackError(f"Audio file no longer exists: '{file_path}'")

        command = self.command_for(file_path)
        log.debug(f"Launching player: {command}")
        try:
            subprocess.Popen(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=os.name != "nt",
            )
        except OSError as e:
            raise PlaybackError(f"Could not start player '{command[0]}': {e}") from e
