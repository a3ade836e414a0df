"""
Manages the Rich progress bar shown while segments are written.
"""

import asyncio

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from m3u8_cli.utils.formatting import format_size


class ProgressManager:
    """
    Renders one progress bar counting written segments against the number of
    segments scheduled for the run. When disabled, every call is a no-op.
    """

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}", justify="left"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            "•",
            TextColumn("[cyan]{task.fields[size]}"),
            "•",
            TimeElapsedColumn(),
            "•",
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )
        self._task_id: TaskID | None = None
        self._bytes = 0

    def start_segments(self, total: int) -> None:
        """Creates the segment counter, starting at zero out of `total`."""
        if not self.enabled:
            return
        self._bytes = 0
        self._task_id = self.progress.add_task(
            "Downloading", total=total, size=format_size(0)
        )

    def advance(self, size: int) -> None:
        """Counts one more written segment of `size` bytes."""
        if not self.enabled or self._task_id is None:
            return
        self._bytes += size
        self.progress.update(
            self._task_id, advance=1, size=format_size(self._bytes)
        )

    def finish(self, message: str = "Done!") -> None:
        """Marks the counter as finished."""
        if not self.enabled or self._task_id is None:
            return
        self.progress.update(self._task_id, description=f"[green]{message}[/green]")
        self.progress.stop_task(self._task_id)

    async def __aenter__(self):
        if self.enabled:
            self.progress.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.enabled:
            await asyncio.sleep(0.1)
            self.progress.stop()
