"""
Data Models Layer.

This package contains the data structures used throughout the application:
the validated job configuration, the segment payload exchanged between the
fetch workers and the writer, and the run statistics.
"""

from .config import DownloadJob
from .segment import SegmentPayload
from .stats import DownloadStats

__all__ = ["DownloadJob", "DownloadStats", "SegmentPayload"]
