import asyncio
import logging

import pytest

from m3u8_cli.exceptions import SegmentFetchError
from m3u8_cli.media.fetcher import SegmentFetcher, create_session
from tests.helpers import SEGMENTS, base_url, segment_server


class FlakyFetcher(SegmentFetcher):
    """Fails deterministically on a designated subset of segments."""

    def __init__(self, failing):
        super().__init__(session=None, base_url="http://host/")
        self.failing = set(failing)
        self.attempted = []

    async def fetch(self, name):
        self.attempted.append(name)
        if name in self.failing:
            raise SegmentFetchError(name, self.resolve(name), "simulated failure")
        return name.encode()


def _drain(queue):
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def test_resolve_joins_against_base_url():
    fetcher = SegmentFetcher(None, "http://host/live/index.m3u8")
    assert fetcher.resolve("seg1.ts") == "http://host/live/seg1.ts"

    fetcher = SegmentFetcher(None, "http://host/live/")
    assert fetcher.resolve("seg1.ts") == "http://host/live/seg1.ts"


def test_failure_does_not_stop_the_chunk():
    async def scenario():
        fetcher = FlakyFetcher(failing={"b.ts"})
        queue = asyncio.Queue()
        failed = await fetcher.fetch_chunk(1, ["a.ts", "b.ts", "c.ts"], queue)
        return fetcher, failed, _drain(queue)

    fetcher, failed, payloads = asyncio.run(scenario())

    assert fetcher.attempted == ["a.ts", "b.ts", "c.ts"]
    assert failed == ["b.ts"]
    assert [p.name for p in payloads] == ["a.ts", "c.ts"]
    assert payloads[0].data == b"a.ts"


def test_failures_are_isolated_between_workers():
    async def scenario():
        fetcher = FlakyFetcher(failing={"a2.ts", "b1.ts"})
        queue = asyncio.Queue()
        results = await asyncio.gather(
            fetcher.fetch_chunk(1, ["a1.ts", "a2.ts", "a3.ts"], queue),
            fetcher.fetch_chunk(2, ["b1.ts", "b2.ts"], queue),
        )
        return results, _drain(queue)

    results, payloads = asyncio.run(scenario())

    assert results == [["a2.ts"], ["b1.ts"]]
    assert sorted(p.name for p in payloads) == ["a1.ts", "a3.ts", "b2.ts"]


def test_unexpected_errors_are_contained(caplog):
    class BrokenFetcher(FlakyFetcher):
        async def fetch(self, name):
            if name == "x.ts":
                raise ValueError("bad header value")
            return await super().fetch(name)

    async def scenario():
        queue = asyncio.Queue()
        failed = await BrokenFetcher(failing=()).fetch_chunk(1, ["x.ts", "y.ts"], queue)
        return failed, _drain(queue)

    with caplog.at_level(logging.ERROR):
        failed, payloads = asyncio.run(scenario())

    assert failed == ["x.ts"]
    assert [p.name for p in payloads] == ["y.ts"]
    assert "x.ts" in caplog.text


def test_fetch_sends_headers_and_reads_body():
    async def scenario():
        async with segment_server(SEGMENTS) as (server, requests):
            async with create_session(2, 5.0) as session:
                fetcher = SegmentFetcher(
                    session, base_url(server), [("Authorization", "Bearer X")]
                )
                body = await fetcher.fetch("seg2.ts")
            return body, requests

    body, requests = asyncio.run(scenario())

    assert body == SEGMENTS["seg2.ts"]
    assert requests[0][0] == "seg2.ts"
    assert requests[0][1]["Authorization"] == "Bearer X"


def test_repeated_header_names_are_all_sent():
    async def scenario():
        async with segment_server(SEGMENTS) as (server, requests):
            async with create_session(1, 5.0) as session:
                fetcher = SegmentFetcher(
                    session, base_url(server), [("X-Tag", "one"), ("X-Tag", "two")]
                )
                await fetcher.fetch("seg1.ts")
            return requests

    requests = asyncio.run(scenario())

    assert requests[0][1].getall("X-Tag") == ["one", "two"]


def test_non_success_status_raises_fetch_error():
    async def scenario():
        async with segment_server(SEGMENTS) as (server, _):
            async with create_session(1, 5.0) as session:
                fetcher = SegmentFetcher(session, base_url(server))
                await fetcher.fetch("missing.ts")

    with pytest.raises(SegmentFetchError) as excinfo:
        asyncio.run(scenario())

    assert excinfo.value.name == "missing.ts"
    assert "404" in excinfo.value.reason


def test_connection_error_raises_fetch_error():
    async def scenario():
        async with create_session(1, 5.0) as session:
            # Nothing listens on port 9 of the loopback interface.
            fetcher = SegmentFetcher(session, "http://127.0.0.1:9/")
            await fetcher.fetch("seg1.ts")

    with pytest.raises(SegmentFetchError):
        asyncio.run(scenario())
