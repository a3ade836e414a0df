"""
Skips segments that a previous run already wrote to the output directory.
"""

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def filter_existing(output_dir: Path, segments: list[str]) -> list[str]:
    """
    Returns the segments that do not exist yet under `output_dir`, in order.

    Presence of the path is enough; a partially written file counts as done.
    """
    remaining = [name for name in segments if not (output_dir / name).exists()]
    skipped = len(segments) - len(remaining)
    if skipped:
        log.info(
            f"[yellow]○ Skipping {skipped} segments already present in "
            f"'{output_dir}'.[/yellow]"
        )
    return remaining
