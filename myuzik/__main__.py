"""
Entry point for `python -m myuzik` and the `myuzik` console script.
Errors that escape a command are rendered here as a final error panel.
"""

import logging
import os
import sys

from myuzik.cli import app as cli_app
from myuzik.cli.formatters import format_error_with_suggestions
from myuzik.exceptions import MyuzikError

log = logging.getLogger("myuzik")


def _use_utf8_streams() -> None:
    # Legacy Windows code pages cannot encode the status symbols.
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            continue


def run() -> int:
    """
    Runs the Typer application. Typer exits on its own once a command
    completes; a status is returned only for errors that escaped it.
    """
    console = cli_app.console
    try:
        cli_app.app()
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        return 0
    except MyuzikError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        return 1
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        return 1
    return 0


def main() -> None:
    if os.name == "nt":
        _use_utf8_streams()
    sys.exit(run())


if __name__ == "__main__":
    main()
