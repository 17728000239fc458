"""Byte-window streaming of media files.

A response is committed only after the file has been opened and its first
chunk read, so open failures still surface as a clean 404. After that point a
failure can only abort the stream.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Any
from typing import AsyncGenerator
from typing import BinaryIO

from fastapi import Response
from fastapi.responses import StreamingResponse
from opentelemetry import trace
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

from video_server.media.errors import MediaIOError
from video_server.media.errors import MediaNotFoundError
from video_server.media.file_meta import resolve_file
from video_server.media.headers import build_stream_headers
from video_server.media.range_planner import plan_stream
from video_server.media.range_utils import parse_range_header
from video_server.media.types import RangeAbsent
from video_server.media.types import RangeMalformed
from video_server.media.types import StreamPlan
from video_server.utils import async_timing_context
from video_server.utils import log_timing


logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
SLOW_STAT_MS = 50.0


def _open_at(path: str | os.PathLike[str], offset: int) -> BinaryIO:
    fh = open(path, "rb")
    try:
        fh.seek(offset)
    except BaseException:
        fh.close()
        raise
    return fh


def _close_orphan(fut: asyncio.Future[BinaryIO]) -> None:
    if not fut.cancelled() and fut.exception() is None:
        fut.result().close()


async def _open_file(path: str | os.PathLike[str], offset: int) -> BinaryIO:
    """Open off the event loop. A handle opened after the caller was cancelled is closed once the worker finishes."""
    fut = asyncio.ensure_future(asyncio.to_thread(_open_at, path, offset))
    try:
        return await asyncio.shield(fut)
    except asyncio.CancelledError:
        fut.add_done_callback(_close_orphan)
        raise


async def iter_file_range(
    path: str | os.PathLike[str],
    start: int,
    end: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncGenerator[bytes, None]:
    """Yield the inclusive byte window [start, end] of a file.

    At most chunk_size bytes are held at a time. The file handle is owned by
    this generator and closed on every exit path, including aclose() when the
    client goes away.

    Raises:
        MediaNotFoundError: file vanished before it could be opened
        MediaIOError: open, seek or read failed, or the file ended early
    """
    if chunk_size <= 0:
        raise ValueError(f"Invalid chunk_size={chunk_size}")

    remaining = end - start + 1
    if remaining <= 0:
        return

    try:
        fh = await _open_file(path, start)
    except FileNotFoundError as e:
        raise MediaNotFoundError(f"No such file: {path}") from e
    except OSError as e:
        raise MediaIOError(f"Failed to open {path}: {e}") from e

    try:
        while remaining > 0:
            try:
                chunk = await asyncio.to_thread(fh.read, min(chunk_size, remaining))
            except OSError as e:
                raise MediaIOError(f"Read failed for {path} with {remaining} bytes left: {e}") from e
            if not chunk:
                raise MediaIOError(f"Unexpected end of file for {path} with {remaining} bytes left")
            remaining -= len(chunk)
            yield chunk
    finally:
        # Synchronous so it still runs inside a cancelled scope
        fh.close()


async def _commit_stream(
    first: bytes,
    body: AsyncGenerator[bytes, None],
    *,
    path: str | os.PathLike[str],
    plan: StreamPlan,
) -> AsyncGenerator[bytes, None]:
    started = time.perf_counter()
    sent = len(first)
    try:
        yield first
        async for chunk in body:
            sent += len(chunk)
            yield chunk
    except MediaIOError as e:
        # Headers are already on the wire; the server drops the connection
        logger.error(f"Stream aborted path={path} sent={sent}/{plan.content_length}: {e.message}")
        raise
    finally:
        await body.aclose()

    log_timing(
        "stream_file",
        (time.perf_counter() - started) * 1000.0,
        extra={"path": path, "status": plan.status_code, "bytes": sent},
    )


class FileStreamResponse(StreamingResponse):
    """StreamingResponse that closes its body and the file stream behind it
    however sending ends, including a client disconnect.
    """

    def __init__(self, content: AsyncGenerator[bytes, None], *, source: AsyncGenerator[bytes, None], **kwargs: Any):
        super().__init__(content, **kwargs)
        self._content = content
        self._source = source

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self._content.aclose()
            await self._source.aclose()


async def stream_file_response(
    path: str | os.PathLike[str],
    content_type: str,
    range_header: str | None,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    method: str = "GET",
) -> Response:
    """Serve a file honouring a single-range Range header.

    Returns 200 for absent or malformed ranges, 206 for satisfiable ones.

    Raises:
        MediaNotFoundError / MediaIOError: file missing or unreadable before any
            byte was sent (callers answer 404)
        RangeNotSatisfiableError: range starts past the end of the file (416)
    """
    async with async_timing_context("resolve_file", log_threshold_ms=SLOW_STAT_MS, extra={"path": path}):
        meta = await resolve_file(path)
    rng = parse_range_header(range_header)

    with tracer.start_as_current_span(
        "stream.plan",
        attributes={
            "file.size": meta.size,
            "range.present": not isinstance(rng, RangeAbsent),
            "range.malformed": isinstance(rng, RangeMalformed),
        },
    ) as span:
        plan = plan_stream(rng, meta.size)
        span.set_attribute("http.status_code", plan.status_code)
        span.set_attribute("stream.content_length", plan.content_length)

    headers = build_stream_headers(plan, content_type)
    logger.info(
        f"Streaming {path} status={plan.status_code} window={plan.start}-{plan.end} "
        f"length={plan.content_length} size={meta.size}"
    )

    if method.upper() == "HEAD" or plan.content_length == 0:
        return Response(status_code=plan.status_code, headers=headers)

    window = plan.window
    body = iter_file_range(meta.path, window.start, window.end, chunk_size)
    try:
        first = await body.__anext__()
    except BaseException:
        await body.aclose()
        raise

    return FileStreamResponse(
        _commit_stream(first, body, path=path, plan=plan),
        source=body,
        status_code=plan.status_code,
        headers=headers,
    )
