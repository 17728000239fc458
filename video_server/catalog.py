"""Static video catalog.

Built once at startup and read concurrently by every request; nothing mutates
it afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from video_server.media.errors import MediaNotFoundError


logger = logging.getLogger(__name__)


class VideoEntry(BaseModel):
    """A catalog record, serialized with the camelCase keys clients expect."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Catalog identifier used in URLs")
    title: str = Field(..., description="Display title")
    description: str = Field("", description="Short description")
    thumbnail_url: str = Field(..., alias="thumbnailUrl", description="Thumbnail path relative to the media root")
    video_url: str = Field(..., alias="videoUrl", description="Video path relative to the media root")
    author: str = Field("", description="Author or director")
    tags: tuple[str, ...] = Field(default_factory=tuple, description="Free-form tags")
    duration: str = Field("", description="Duration in seconds, as a decimal string")


DEFAULT_VIDEOS: tuple[VideoEntry, ...] = (
    VideoEntry(
        id="1",
        title="Metropolis",
        description="Metropolis, the 1927 silent film directed by Fritz Lang",
        thumbnailUrl="./thumbnails/metropolis.png",
        videoUrl="./videos/metropolis.mp4",
        author="Fritz Lang",
        tags=("dramatic", "orchestral", "silent film"),
        duration="12000.000",
    ),
)


class Catalog:
    """Read-only lookup from video id to its entry and on-disk files."""

    def __init__(self, media_root: str | Path, videos: Iterable[VideoEntry] = DEFAULT_VIDEOS) -> None:
        self.media_root = Path(media_root).resolve()
        entries = tuple(videos)
        self._by_id: dict[str, VideoEntry] = {}
        for entry in entries:
            if entry.id in self._by_id:
                raise ValueError(f"Duplicate catalog id: {entry.id}")
            self._by_id[entry.id] = entry
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def videos(self) -> tuple[VideoEntry, ...]:
        return self._entries

    def find_by_id(self, video_id: str) -> Optional[VideoEntry]:
        return self._by_id.get(video_id)

    def resolve_path(self, relative: str) -> Path:
        """Join a catalog url onto the media root.

        Raises:
            MediaNotFoundError: the url escapes the media root
        """
        candidate = (self.media_root / relative).resolve()
        if not candidate.is_relative_to(self.media_root):
            logger.warning(f"Catalog path escapes media root: {relative}")
            raise MediaNotFoundError(f"Path outside media root: {relative}")
        return candidate

    def video_path(self, video_id: str) -> Path:
        entry = self._require(video_id)
        return self.resolve_path(entry.video_url)

    def thumbnail_path(self, video_id: str) -> Path:
        entry = self._require(video_id)
        return self.resolve_path(entry.thumbnail_url)

    def _require(self, video_id: str) -> VideoEntry:
        entry = self.find_by_id(video_id)
        if entry is None:
            raise MediaNotFoundError(f"Video with id: {video_id} not found")
        return entry
