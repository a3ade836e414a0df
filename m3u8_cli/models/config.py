"""
Pydantic model for the configuration of a single download run.
Provides robust validation for all settings.
"""

from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_WORKERS = 8
DEFAULT_TIMEOUT = 60.0
DEFAULT_QUEUE_SIZE = 0
DEFAULT_OUTPUT_DIR = "./"


class DownloadJob(BaseModel):
    """An immutable, validated description of one download run."""

    # Inputs
    playlist_path: Path
    base_url: str
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    headers: tuple[tuple[str, str], ...] = Field(default_factory=tuple)

    # Download Settings
    resume: bool = False
    workers: int = DEFAULT_WORKERS
    timeout: float = DEFAULT_TIMEOUT
    queue_size: int = DEFAULT_QUEUE_SIZE
    dry_run: bool = False

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensures segments can be resolved against the base URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Base URL must be an absolute http(s) URL, got: {v!r}")
        return v

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 64:
            raise ValueError("Worker count must be between 1 and 64.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Request timeout must be greater than zero.")
        return v

    @field_validator("queue_size")
    @classmethod
    def validate_queue_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Queue size cannot be negative (0 means unbounded).")
        return v
