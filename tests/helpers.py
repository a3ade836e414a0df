import asyncio
import contextlib

from aiohttp import web
from aiohttp.test_utils import TestServer
from rich.console import Console

from m3u8_cli.cli.progress_manager import ProgressManager

SEGMENTS = {
    "seg1.ts": b"\x47segment-one",
    "seg2.ts": b"\x47segment-two",
    "seg3.ts": b"\x47segment-three",
}

PLAYLIST = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:10
#EXTINF:10.0,
seg1.ts
#EXTINF:10.0,
seg2.ts
#EXTINF:10.0,
seg3.ts
#EXT-X-ENDLIST
"""


@contextlib.asynccontextmanager
async def segment_server(
    segments: dict[str, bytes],
    fail: frozenset[str] = frozenset(),
    delays: dict[str, float] | None = None,
):
    """
    Serves `segments` at `/<name>`. Names in `fail` answer 404, names in
    `delays` answer after sleeping that many seconds.
    Yields the server and the list of (name, headers) of every request.
    """
    requests = []

    async def handler(request: web.Request) -> web.Response:
        name = request.match_info["name"]
        requests.append((name, request.headers.copy()))
        if name in fail or name not in segments:
            raise web.HTTPNotFound()
        if delays and name in delays:
            await asyncio.sleep(delays[name])
        return web.Response(body=segments[name])

    server_app = web.Application()
    server_app.router.add_get("/{name}", handler)
    async with TestServer(server_app) as server:
        yield server, requests


def base_url(server: TestServer) -> str:
    return str(server.make_url("/"))


def silent_progress() -> ProgressManager:
    return ProgressManager(Console(quiet=True), enabled=False)
