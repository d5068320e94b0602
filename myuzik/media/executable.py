"""
Locates the yt-dlp executable, fetching the official release build once into
the user cache directory when it is not installed.
"""

import asyncio
import logging
import os
import shutil
import sys
from pathlib import Path

import aiofiles
import aiohttp

from myuzik.exceptions import ExecutableNotFoundError

log = logging.getLogger(__name__)

DOWNLOADER_NAME = "yt-dlp"
RELEASE_URL = "https://github.com/yt-dlp/yt-dlp/releases/latest/download/{asset}"


def get_cache_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("LOCALAPPDATA", "~\\AppData\\Local"))
        return base_dir.expanduser() / "myuzik" / "cache"
    base_dir = Path(os.getenv("XDG_CACHE_HOME", "~/.cache"))
    return base_dir.expanduser() / "myuzik"


def release_asset_name() -> str:
    """Name of the yt-dlp release asset that runs on this platform."""
    if os.name == "nt":
        return "yt-dlp.exe"
    if sys.platform == "darwin":
        return "yt-dlp_macos"
    return "yt-dlp"


class ExecutableResolver:
    """
    Resolves the download executable, in order: an explicitly configured path,
    yt-dlp on PATH, a previously cached release build, and finally a fresh
    download of the release build.
    """

    def __init__(
        self,
        cache_dir: Path,
        configured_path: str = "",
        auto_fetch: bool = True,
        max_attempts: int = 3,
        base_delay: float = 1.5,
    ):
        self.cache_dir = cache_dir
        self.configured_path = configured_path
        self.auto_fetch = auto_fetch
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._resolved: Path | None = None

    @property
    def cached_path(self) -> Path:
        return self.cache_dir / release_asset_name()

    def __call__(self) -> Path:
        return self.resolve()

    def resolve(self) -> Path:
        """
        Returns the path to a runnable download executable.

        Raises:
            ExecutableNotFoundError: If no executable is available.
        """
        if self._resolved is not None:
            return self._resolved

        if self.configured_path:
            path = Path(self.configured_path).expanduser()
            if not path.is_file():
                raise ExecutableNotFoundError(
                    f"Configured downloader not found at '{path}'."
                )
            self._resolved = path
            return path

        if found := shutil.which(DOWNLOADER_NAME):
            log.debug(f"Using {DOWNLOADER_NAME} from PATH: {found}")
            self._resolved = Path(found)
            return self._resolved

        if self.cached_path.is_file():
            log.debug(f"Using cached {DOWNLOADER_NAME}: {self.cached_path}")
            self._resolved = self.cached_path
            return self._resolved

        if not self.auto_fetch:
            raise ExecutableNotFoundError(
                f"{DOWNLOADER_NAME} is not installed and automatic download is "
                "disabled."
            )

        log.info(f"[cyan]Downloading {DOWNLOADER_NAME}...[/cyan]")
        try:
            asyncio.run(self.fetch(self.cached_path))
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise ExecutableNotFoundError(
                f"Failed to download {DOWNLOADER_NAME}: {e}", detail=str(e)
            ) from e
        log.info(f"[green]✓ {DOWNLOADER_NAME} downloaded successfully.[/green]")
        self._resolved = self.cached_path
        return self._resolved

    async def fetch(self, destination: Path) -> None:
        """Downloads the release asset to destination and marks it executable."""
        url = RELEASE_URL.format(asset=release_asset_name())
        destination.parent.mkdir(parents=True, exist_ok=True)
        temp_path = destination.with_suffix(destination.suffix + ".tmp")

        last_exception: Exception | None = None
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                for attempt in range(1, self.max_attempts + 1):
                    try:
                        async with session.get(url, allow_redirects=True) as response:
                            response.raise_for_status()
                            async with aiofiles.open(temp_path, "wb") as f:
                                async for chunk in response.content.iter_chunked(
                                    262144
                                ):
                                    await f.write(chunk)
                        os.chmod(temp_path, 0o700)
                        os.replace(temp_path, destination)
                        return
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_exception = e
                        log.debug(
                            f"Download attempt {attempt}/{self.max_attempts} for "
                            f"'{url}' failed: {e}. Retrying..."
                        )
                        if attempt < self.max_attempts:
                            await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))
        finally:
            if temp_path.exists():
                try:
                    os.remove(temp_path)
                except OSError:
                    pass

        if last_exception:
            raise last_exception
