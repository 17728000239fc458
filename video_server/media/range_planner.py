"""Pure planning logic for range requests.

No IO; deterministic mapping from a parsed Range header and a file size to the
status, headers and byte window of a response.
"""

from __future__ import annotations

from video_server.media.errors import RangeNotSatisfiableError
from video_server.media.types import RangeParsed
from video_server.media.types import RangeRequest
from video_server.media.types import StreamPlan


def full_plan(file_size: int) -> StreamPlan:
    """Plan a 200 response covering the whole file.

    An empty file yields the window [0, -1], which streams zero bytes.
    """
    return StreamPlan(status_code=200, content_length=file_size, start=0, end=file_size - 1)


def partial_plan(start: int, end: int, file_size: int) -> StreamPlan:
    return StreamPlan(
        status_code=206,
        content_length=end - start + 1,
        start=start,
        end=end,
        content_range=(start, end, file_size),
    )


def plan_stream(rng: RangeRequest, file_size: int) -> StreamPlan:
    """Resolve a parsed range against the actual file size.

    Args:
        rng: Result of parse_range_header.
        file_size: Current size of the file in bytes.

    Returns:
        StreamPlan whose content_length always equals the streamed byte count.

    Raises:
        RangeNotSatisfiableError: the range starts at or past the end of file.
    """
    if not isinstance(rng, RangeParsed):
        # Absent and malformed headers are both served in full
        return full_plan(file_size)

    if rng.suffix_length is not None:
        if file_size == 0:
            raise RangeNotSatisfiableError(file_size)
        return partial_plan(max(0, file_size - rng.suffix_length), file_size - 1, file_size)

    start = rng.start or 0
    if start >= file_size:
        raise RangeNotSatisfiableError(file_size)

    last_byte = file_size - 1
    end = last_byte if rng.end is None else min(rng.end, last_byte)
    return partial_plan(start, end, file_size)
