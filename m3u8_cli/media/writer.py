"""
The single consumer that persists fetched segments to the output directory.
"""

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import aiofiles

from m3u8_cli.exceptions import SegmentWriteError
from m3u8_cli.models.segment import SegmentPayload

if TYPE_CHECKING:
    from m3u8_cli.cli.progress_manager import ProgressManager

log = logging.getLogger(__name__)

# Put on the queue once every worker has finished.
END_OF_STREAM = None


class SegmentWriter:
    """
    Writes every payload it receives to `<output_dir>/<segment name>`.

    Only this object touches the output directory and its own counters, so no
    locking is needed between the workers and the filesystem.
    """

    def __init__(
        self,
        output_dir: Path,
        total: int,
        progress_manager: "ProgressManager | None" = None,
    ):
        self.output_dir = output_dir
        self.total = total
        self.progress_manager = progress_manager
        self.written = 0
        self.bytes_written = 0

    async def run(self, queue: "asyncio.Queue[SegmentPayload | None]") -> int:
        """
        Drains the queue until the end-of-stream marker arrives.

        Returns:
            The number of segments written.

        Raises:
            SegmentWriteError: If a segment cannot be written. This ends the run.
        """
        while True:
            payload = await queue.get()
            try:
                if payload is END_OF_STREAM:
                    break
                await self._write(payload)
            finally:
                queue.task_done()

        if self.progress_manager:
            self.progress_manager.finish()
        log.debug(f"Writer drained: {self.written}/{self.total} segments written.")
        return self.written

    async def _write(self, payload: SegmentPayload) -> None:
        path = self.output_dir / payload.name
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(payload.data)
        except OSError as e:
            raise SegmentWriteError(
                f"Could not write segment '{payload.name}' to '{path}': {e}"
            ) from e

        self.written += 1
        self.bytes_written += len(payload)
        if self.progress_manager:
            self.progress_manager.advance(len(payload))
