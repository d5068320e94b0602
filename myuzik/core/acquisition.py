"""
Turns a source URL into a cataloguable Song by driving the yt-dlp executable.
"""

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from myuzik.exceptions import AcquisitionFailure
from myuzik.media.integrity import FileIntegrityChecker
from myuzik.media.process import AcquisitionRunner, ProcessResult
from myuzik.models.catalog import Song
from myuzik.utils.path import create_private_dir

log = logging.getLogger(__name__)

OUTPUT_TEMPLATE = "%(title)s.%(ext)s"


class AcquisitionOrchestrator:
    """
    Downloads the audio track of a video into the storage directory.

    The final file name depends on the video's title, which is only known once
    yt-dlp has run. The tool prints the path of the file it produced, and that
    file is verified on disk before it is cataloged.
    """

    def __init__(
        self,
        runner: AcquisitionRunner,
        resolve_executable: Callable[[], Path],
        storage_dir: Path,
        audio_format: str = "mp3",
        audio_quality: str = "0",
        extension: str | None = None,
        timeout: float | None = None,
        verify_integrity: bool = False,
    ):
        self.runner = runner
        self.resolve_executable = resolve_executable
        self.storage_dir = storage_dir
        self.audio_format = audio_format
        self.audio_quality = audio_quality
        self.extension = extension or audio_format
        self.timeout = timeout or None
        self.verify_integrity = verify_integrity

    def build_arguments(self, source_url: str) -> list[str]:
        """Arguments passed to yt-dlp, excluding the executable itself."""
        return [
            "-x",
            "--audio-format",
            self.audio_format,
            "--audio-quality",
            self.audio_quality,
            "-o",
            str(self.storage_dir / OUTPUT_TEMPLATE),
            "--no-simulate",
            "--print",
            "after_move:filepath",
            source_url,
        ]

    def expected_path(self, title: str) -> Path:
        return self.storage_dir / f"{title}.{self.extension}"

    def acquire(self, source_url: str) -> Song:
        """
        Downloads the audio of source_url and returns the Song describing it.

        Raises:
            AcquisitionFailure: If the executable is missing, exits with an
            error, or does not produce the expected file.
        """
        try:
            if create_private_dir(self.storage_dir):
                log.debug(f"Created storage directory '{self.storage_dir}'.")
        except OSError as e:
            raise AcquisitionFailure(
                f"Cannot create storage directory '{self.storage_dir}': {e}",
                detail=str(e),
            ) from e

        executable = self.resolve_executable()
        command = [str(executable), *self.build_arguments(source_url)]
        result = self._run(command)

        if not result.succeeded:
            detail = result.stderr.strip()
            raise AcquisitionFailure(
                f"Download failed (exit status {result.returncode}): "
                f"{detail or 'no error output'}",
                detail=detail,
            )

        file_path = self._output_path(result)
        if not file_path.is_file():
            raise AcquisitionFailure(f"File not found after download: '{file_path}'")

        if self.verify_integrity and not FileIntegrityChecker.check_audio(
            str(file_path)
        ):
            raise AcquisitionFailure(
                f"Downloaded file failed integrity check: '{file_path}'"
            )

        log.debug(f"Acquired '{file_path.name}' from {source_url}")
        return Song(name=file_path.name, file_path=str(file_path))

    def _run(self, command: list[str]) -> ProcessResult:
        try:
            return self.runner.run(command, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise AcquisitionFailure(
                f"Download timed out after {self.timeout:g} seconds."
            ) from e
        except OSError as e:
            raise AcquisitionFailure(
                f"Could not run downloader '{command[0]}': {e}", detail=str(e)
            ) from e

    def _output_path(self, result: ProcessResult) -> Path:
        """
        The file yt-dlp reported writing. When the reported path lies outside
        the storage directory it is rebuilt from its title and the extension.
        """
        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            raise AcquisitionFailure(
                "Downloader reported success but did not report an output file.",
                detail=result.stderr.strip(),
            )
        reported = Path(lines[0])
        if reported.parent.resolve() == self.storage_dir.resolve() and reported.is_file():
            return reported
        return self.expected_path(reported.stem)
