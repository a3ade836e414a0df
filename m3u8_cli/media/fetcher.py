"""
Fetches segments over HTTP and forwards their bodies to the writer.
"""

import asyncio
import logging
from urllib.parse import urljoin

import aiohttp

from m3u8_cli.exceptions import SegmentFetchError
from m3u8_cli.models.segment import SegmentPayload

log = logging.getLogger(__name__)


def create_session(max_workers: int = 8, timeout: float = 60.0) -> aiohttp.ClientSession:
    """
    Creates the ClientSession shared by every worker of a run.

    Each request is bounded by `timeout` seconds so that a stalled server
    cannot hang a worker forever. Must be called from a running event loop.

    Args:
        max_workers: Number of concurrent workers (one connection each).
        timeout: Upper bound in seconds for a single segment request.
    """
    connector = aiohttp.TCPConnector(
        limit=max_workers * 2,  # Total connections
        limit_per_host=max_workers,
        ttl_dns_cache=600,  # 10 minutes
        keepalive_timeout=30,
        enable_cleanup_closed=True,
    )
    client_timeout = aiohttp.ClientTimeout(total=timeout, sock_connect=15)
    log.debug(
        f"Created session with limit_per_host={max_workers}, timeout={timeout}s"
    )
    return aiohttp.ClientSession(connector=connector, timeout=client_timeout)


class SegmentFetcher:
    """Downloads segments relative to a base URL with a fixed set of headers."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        headers: list[tuple[str, str]] | tuple[tuple[str, str], ...] = (),
    ):
        self.session = session
        self.base_url = base_url
        # A list of pairs keeps repeated header names.
        self.headers = list(headers)

    def resolve(self, name: str) -> str:
        """Resolves a segment name against the base URL."""
        return urljoin(self.base_url, name)

    async def fetch(self, name: str) -> bytes:
        """
        Downloads one segment and returns its full body.

        Raises:
            SegmentFetchError: On a network error, a non-success status or a body
            that cannot be read.
        """
        url = self.resolve(name)
        try:
            async with self.session.get(url, headers=self.headers) as response:
                response.raise_for_status()
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            raise SegmentFetchError(name, url, reason) from e

    async def fetch_chunk(
        self,
        worker_id: int,
        chunk: list[str],
        queue: "asyncio.Queue[SegmentPayload | None]",
    ) -> list[str]:
        """
        Fetches every segment of `chunk` in order and queues the results.

        A failing segment is logged and skipped; the rest of the chunk is still
        fetched. Nothing is retried.

        Returns:
            The names of the segments that could not be fetched.
        """
        failed = []
        log.debug(f"Worker {worker_id} started with {len(chunk)} segments.")
        for name in chunk:
            try:
                data = await self.fetch(name)
            except SegmentFetchError as e:
                log.error(f"[red]  ✗ {e}[/red]")
                failed.append(name)
                continue
            except Exception as e:
                log.error(
                    f"[red]  ✗ An unexpected error occurred for segment '{name}': "
                    f"{e}[/red]",
                    exc_info=log.getEffectiveLevel() == logging.DEBUG,
                )
                failed.append(name)
                continue
            await queue.put(SegmentPayload(name, data))

        log.debug(
            f"Worker {worker_id} finished: {len(chunk) - len(failed)} fetched, "
            f"{len(failed)} failed."
        )
        return failed
