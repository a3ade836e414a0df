"""
The unit of work that crosses from the fetch workers to the writer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SegmentPayload:
    """A fetched segment: its name in the playlist and the raw response body."""

    name: str
    data: bytes

    def __len__(self) -> int:
        return len(self.data)
