from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path

from video_server.media.errors import MediaIOError
from video_server.media.errors import MediaNotFoundError
from video_server.media.types import FileMeta


logger = logging.getLogger(__name__)


async def resolve_file(path: str | os.PathLike[str]) -> FileMeta:
    """Stat a media file without opening it.

    Raises:
        MediaNotFoundError: path is missing or not a regular file
        MediaIOError: any other stat failure (permissions, device errors)
    """
    p = Path(path)
    try:
        st = await asyncio.to_thread(os.stat, p)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise MediaNotFoundError(f"No such file: {p}") from e
    except OSError as e:
        logger.warning(f"stat failed for {p}: {e}")
        raise MediaIOError(f"Failed to read metadata for {p}: {e}") from e

    if not stat.S_ISREG(st.st_mode):
        raise MediaNotFoundError(f"Not a regular file: {p}")

    return FileMeta(path=p, size=int(st.st_size))
