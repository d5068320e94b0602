"""
Utility for exporting a playlist as an M3U file.
"""

import logging
from pathlib import Path

from mutagen import File as MutagenFile
from mutagen import MutagenError
from rich.markup import escape

from myuzik.exceptions import PersistenceError
from myuzik.models.catalog import Playlist
from myuzik.utils.path import playlist_filename

log = logging.getLogger(__name__)


def _extinf(audio_path: Path) -> str:
    """The #EXTINF line for one file: duration and title, or -1 and the stem."""
    try:
        audio = MutagenFile(audio_path, easy=True)
    except (MutagenError, OSError):
        return f"#EXTINF:-1,{audio_path.stem}"
    if audio is None:
        return f"#EXTINF:-1,{audio_path.stem}"

    length = int(audio.info.length) if audio.info else -1
    title = audio.get("title", [audio_path.stem])[0] if audio.tags else audio_path.stem
    return f"#EXTINF:{length},{title}"


def export_m3u(playlist: Playlist, destination_dir: Path) -> Path:
    """
    Writes an extended M3U file listing every song of a playlist, in order.

    Returns:
        The path of the written file.
    """
    playlist_path = destination_dir / playlist_filename(playlist.name, "m3u")

    content = ["#EXTM3U"]
    for song in playlist.songs:
        audio_path = Path(song.file_path)
        if audio_path.is_file():
            content.append(_extinf(audio_path))
        else:
            log.warning(
                f"[yellow]Missing file for '{escape(song.name)}':[/] {escape(str(audio_path))}"
            )
            content.append(f"#EXTINF:-1,{audio_path.stem}")
        content.append(str(audio_path.absolute()))

    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
        with open(playlist_path, "w", encoding="utf-8") as f:
            f.write("\n".join(content) + "\n")
    except OSError as e:
        raise PersistenceError(f"Failed to write playlist file: {e}") from e

    log.info(f"Exported playlist: '{escape(str(playlist_path))}'")
    return playlist_path
