"""
Runs the external download executable as a blocking subprocess.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished external process."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class AcquisitionRunner(Protocol):
    """Runs an acquisition command to completion and reports its outcome."""

    def run(self, command: list[str], timeout: float | None = None) -> ProcessResult:
        """
        Raises:
            OSError: If the executable cannot be started.
            subprocess.TimeoutExpired: If the timeout elapses.
        """
        ...


class SubprocessRunner:
    """An AcquisitionRunner backed by subprocess.run."""

    def run(self, command: list[str], timeout: float | None = None) -> ProcessResult:
        log.debug(f"Running: {' '.join(command)}")
        completed = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
