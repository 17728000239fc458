import dataclasses
import os
from pathlib import Path
from typing import Any
from typing import Generator

import dotenv
import pytest

from video_server.catalog import VideoEntry


VIDEO_SIZE = 1000
THUMBNAIL_SIZE = 300


def fixture_bytes(size: int, seed: int = 0) -> bytes:
    return bytes((i * 7 + seed) % 251 for i in range(size))


@pytest.fixture(scope="session", autouse=True)
def _load_test_env() -> Generator[None, None, None]:
    """Load test environment variables from the checked-in defaults."""
    project_root = Path(__file__).parents[2]
    dotenv.load_dotenv(project_root / ".env.defaults", override=True)
    os.environ["LOKI_ENABLED"] = "false"
    yield


@pytest.fixture
def video_bytes() -> bytes:
    return fixture_bytes(VIDEO_SIZE)


@pytest.fixture
def thumbnail_bytes() -> bytes:
    return fixture_bytes(THUMBNAIL_SIZE, seed=3)


@pytest.fixture
def media_root(tmp_path: Path, video_bytes: bytes, thumbnail_bytes: bytes) -> Path:
    (tmp_path / "videos").mkdir()
    (tmp_path / "thumbnails").mkdir()
    (tmp_path / "videos" / "metropolis.mp4").write_bytes(video_bytes)
    (tmp_path / "thumbnails" / "metropolis.png").write_bytes(thumbnail_bytes)
    (tmp_path / "videos" / "empty.mp4").write_bytes(b"")
    return tmp_path


@pytest.fixture
def catalog_videos() -> tuple[VideoEntry, ...]:
    from video_server.catalog import DEFAULT_VIDEOS

    return DEFAULT_VIDEOS + (
        VideoEntry(
            id="2",
            title="Missing",
            thumbnailUrl="./thumbnails/missing.png",
            videoUrl="./videos/missing.mp4",
        ),
        VideoEntry(
            id="3",
            title="Empty",
            thumbnailUrl="./thumbnails/metropolis.png",
            videoUrl="./videos/empty.mp4",
        ),
        VideoEntry(
            id="4",
            title="Escapes",
            thumbnailUrl="../outside.png",
            videoUrl="../../etc/passwd",
        ),
    )


@pytest.fixture
def app(media_root: Path, catalog_videos: tuple[VideoEntry, ...]) -> Any:
    from video_server.config import get_config
    from video_server.main import factory

    # Small chunks so every response spans several reads
    config = dataclasses.replace(get_config(), media_root=str(media_root), stream_chunk_size_bytes=128)
    return factory(config, catalog_videos)
