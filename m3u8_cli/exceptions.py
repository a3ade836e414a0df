"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class M3u8CliError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(M3u8CliError):
    """Raised for issues related to configuration, options or the header file."""


class PlaylistError(M3u8CliError):
    """Raised when the playlist cannot be read or references no segments."""


class SegmentFetchError(M3u8CliError):
    """Raised when a single segment cannot be fetched. Never aborts a run."""

    def __init__(self, name: str, url: str, reason: str):
        super().__init__(f"Segment '{name}' failed ({url}): {reason}")
        self.name = name
        self.url = url
        self.reason = reason


class SegmentWriteError(M3u8CliError):
    """Raised when a fetched segment cannot be written to the output directory."""
