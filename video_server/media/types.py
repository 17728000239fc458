from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from typing import Union


@dataclass(frozen=True)
class RangeAbsent:
    """No Range header, or an empty one."""


@dataclass(frozen=True)
class RangeMalformed:
    reason: str


@dataclass(frozen=True)
class RangeParsed:
    # Unvalidated against the file size. Suffix ranges carry only suffix_length.
    start: Optional[int] = None
    end: Optional[int] = None
    suffix_length: Optional[int] = None


RangeRequest = Union[RangeAbsent, RangeMalformed, RangeParsed]

ABSENT = RangeAbsent()


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class StreamPlan:
    status_code: int
    content_length: int
    start: int
    end: int
    # (start, end, total) for partial responses
    content_range: Optional[tuple[int, int, int]] = None

    @property
    def window(self) -> ByteRange:
        return ByteRange(self.start, self.end)


@dataclass(frozen=True)
class FileMeta:
    path: Path
    size: int
