"""
Dataclass for tracking download session statistics.
"""

from dataclasses import dataclass, field


@dataclass
class DownloadStats:
    """Tracks the outcome of a download run."""

    segments_in_playlist: int = 0
    segments_skipped_exists: int = 0
    segments_scheduled: int = 0
    segments_written: int = 0
    bytes_written: int = 0
    workers: int = 0
    dry_run: bool = False
    failed_segments: list[str] = field(default_factory=list)

    @property
    def segments_failed(self) -> int:
        return len(self.failed_segments)

    @property
    def is_complete(self) -> bool:
        """True when every scheduled segment reached the output directory."""
        return not self.failed_segments and (
            self.dry_run or self.segments_written == self.segments_scheduled
        )
