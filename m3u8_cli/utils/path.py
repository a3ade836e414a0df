"""
Utilities for handling file paths.
"""

from pathlib import Path

from m3u8_cli.exceptions import ConfigurationError


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    try:
        directory_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(
            f"Output directory '{directory_path}' could not be created: {e}"
        ) from e
