"""Parsing of single-range ``Range`` request headers.

Size-independent: the result is only the client's intent. Reconciling it with
the file lives in ``range_planner``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from video_server.media.errors import MalformedRangeError
from video_server.media.types import ABSENT
from video_server.media.types import RangeMalformed
from video_server.media.types import RangeParsed
from video_server.media.types import RangeRequest


logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def parse_range_header(range_header: Optional[str]) -> RangeRequest:
    """Classify a Range header value as absent, malformed or parsed.

    ``bytes=-N`` is treated as a suffix range (the last N bytes of the file).
    """
    if range_header is None or not range_header.strip():
        return ABSENT
    try:
        return parse_byte_range_spec(range_header)
    except MalformedRangeError as e:
        logger.debug(f"Ignoring malformed Range header {range_header!r}: {e.message}")
        return RangeMalformed(reason=e.message)


def parse_byte_range_spec(range_header: str) -> RangeParsed:
    unit, sep, spec = range_header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise MalformedRangeError(f"Invalid range unit: {range_header}")

    spec = spec.strip()
    if "," in spec:
        raise MalformedRangeError(f"Multiple ranges are not supported: {range_header}")

    first, dash, last = spec.partition("-")
    if not dash:
        raise MalformedRangeError(f"Invalid range format: {range_header}")
    first = first.strip()
    last = last.strip()

    if not first:
        if not _DIGITS.fullmatch(last):
            raise MalformedRangeError(f"Invalid range suffix: {range_header}")
        suffix = int(last)
        if suffix <= 0:
            raise MalformedRangeError(f"Invalid range suffix: {range_header}")
        return RangeParsed(suffix_length=suffix)

    if not _DIGITS.fullmatch(first):
        raise MalformedRangeError(f"Invalid range start: {range_header}")
    start = int(first)

    if not last:
        return RangeParsed(start=start)

    if not _DIGITS.fullmatch(last):
        raise MalformedRangeError(f"Invalid range end: {range_header}")
    end = int(last)
    if end < start:
        raise MalformedRangeError(f"Range end before start: {range_header}")

    return RangeParsed(start=start, end=end)
