"""
The main orchestrator: loads the playlist, applies resume filtering, schedules
the fetch workers and the writer, and waits for the run to drain.
"""

import asyncio
import contextlib
import logging

from m3u8_cli.cli.progress_manager import ProgressManager
from m3u8_cli.exceptions import M3u8CliError
from m3u8_cli.media import END_OF_STREAM, SegmentFetcher, SegmentWriter, create_session
from m3u8_cli.models.config import DownloadJob
from m3u8_cli.models.segment import SegmentPayload
from m3u8_cli.models.stats import DownloadStats
from m3u8_cli.storage.resume import filter_existing
from m3u8_cli.utils.path import create_dir
from m3u8_cli.utils.playlist import load_playlist

from .scheduler import partition

log = logging.getLogger(__name__)


class DownloadManager:
    """Orchestrates a single download run."""

    def __init__(self, job: DownloadJob, progress_manager: ProgressManager):
        self.job = job
        self.progress_manager = progress_manager
        self.stats = DownloadStats(dry_run=job.dry_run)

    async def execute(self) -> DownloadStats:
        """
        Runs the job to completion and returns its statistics.

        Per-segment fetch failures are recorded in the returned stats. Fatal
        conditions (unreadable or empty playlist, write failures) raise.
        """
        job = self.job

        log.debug("State: init")
        if not job.dry_run:
            create_dir(job.output_dir)

        segments = load_playlist(job.playlist_path)
        self.stats.segments_in_playlist = len(segments)
        log.debug(f"State: list loaded ({len(segments)} segments)")

        if job.resume:
            remaining = filter_existing(job.output_dir, segments)
            self.stats.segments_skipped_exists = len(segments) - len(remaining)
            segments = remaining
        log.debug(f"State: filtered ({len(segments)} segments remaining)")

        if not segments:
            log.info("[green]✓ All segments are already present. Done![/green]")
            return self.stats

        chunks = partition(segments, job.workers)
        self.stats.segments_scheduled = len(segments)
        self.stats.workers = len(chunks)

        if job.dry_run:
            self._log_plan(chunks)
            return self.stats

        log.info(
            f"Downloading [bold]{len(segments)}[/bold] segments with "
            f"[bold]{len(chunks)}[/bold] workers into [dim]{job.output_dir}[/dim]"
        )
        await self._run(chunks)
        log.debug("State: done")
        return self.stats

    async def _run(self, chunks: list[list[str]]) -> None:
        """Starts the writer and one worker per chunk, then drains the queue."""
        queue: asyncio.Queue[SegmentPayload | None] = asyncio.Queue(
            maxsize=self.job.queue_size
        )
        writer = SegmentWriter(
            self.job.output_dir, self.stats.segments_scheduled, self.progress_manager
        )
        self.progress_manager.start_segments(self.stats.segments_scheduled)

        async with create_session(len(chunks), self.job.timeout) as session:
            fetcher = SegmentFetcher(session, self.job.base_url, self.job.headers)

            writer_task = asyncio.create_task(writer.run(queue), name="segment-writer")
            worker_tasks = [
                asyncio.create_task(
                    fetcher.fetch_chunk(worker_id, chunk, queue),
                    name=f"segment-worker-{worker_id}",
                )
                for worker_id, chunk in enumerate(chunks, start=1)
            ]
            log.debug(f"State: scheduled ({len(worker_tasks)} workers + writer)")

            try:
                failures = await self._join_workers(worker_tasks, writer_task)
                # Every producer has finished, release the writer.
                await queue.put(END_OF_STREAM)
                log.debug("State: draining")
                await writer_task
            finally:
                for task in [writer_task, *worker_tasks]:
                    if not task.done():
                        task.cancel()
                self.stats.segments_written = writer.written
                self.stats.bytes_written = writer.bytes_written

        for failed in failures:
            self.stats.failed_segments.extend(failed)

    async def _join_workers(
        self, worker_tasks: list[asyncio.Task], writer_task: asyncio.Task
    ) -> list[list[str]]:
        """
        Waits for every worker to finish and returns their failed segments.

        The writer can only stop early by failing. In that case the workers are
        cancelled and the writer's error is raised.
        """
        producers = asyncio.gather(*worker_tasks)
        await asyncio.wait(
            {producers, writer_task}, return_when=asyncio.FIRST_COMPLETED
        )

        if writer_task.done():
            producers.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await producers
            writer_task.result()
            raise M3u8CliError("Segment writer stopped before all workers finished.")

        return producers.result()

    def _log_plan(self, chunks: list[list[str]]) -> None:
        log.info(
            f"[bold cyan]Dry run:[/bold cyan] {self.stats.segments_scheduled} segments "
            f"across {len(chunks)} workers"
        )
        for worker_id, chunk in enumerate(chunks, start=1):
            log.info(
                f"  Worker {worker_id}: {len(chunk)} segments "
                f"[dim]({chunk[0]} … {chunk[-1]})[/dim]"
            )
