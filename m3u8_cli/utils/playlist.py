"""
Utility for extracting segment references from an M3U8 playlist.
"""

import logging
import re
from pathlib import Path

from m3u8_cli.exceptions import PlaylistError

log = logging.getLogger(__name__)

SEGMENT_PATTERN = re.compile(r"[a-zA-Z0-9]+\.ts")


def extract_segments(text: str) -> list[str]:
    """
    Returns the segment names referenced by a playlist, in playlist order.

    Only the first segment token of a line is taken. Tags, directives and any
    other line without a token are ignored. Duplicates are kept.
    """
    segments = []
    for line in text.splitlines():
        if match := SEGMENT_PATTERN.search(line):
            segments.append(match.group(0))
    return segments


def load_playlist(path: Path) -> list[str]:
    """
    Reads a playlist file and extracts its segment list.

    Raises:
        PlaylistError: If the file cannot be read or references no segments.
    """
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise PlaylistError(f"Playlist '{path}' could not be read: {e}") from e

    segments = extract_segments(content)
    if not segments:
        raise PlaylistError(
            f"Playlist '{path}' is invalid: no segment references were found."
        )

    log.debug(f"Extracted {len(segments)} segments from '{path}'.")
    return segments
