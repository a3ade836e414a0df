"""
Media Transfer Layer.

This package is responsible for moving segment bytes: fetching them over
HTTP and writing them to the output directory.
"""

from .fetcher import SegmentFetcher, create_session
from .writer import END_OF_STREAM, SegmentWriter

__all__ = ["END_OF_STREAM", "SegmentFetcher", "SegmentWriter", "create_session"]
