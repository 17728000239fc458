import pytest

from video_server.config import get_config


def test_defaults_loaded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VIDEO_SERVER_STREAM_CHUNK_SIZE_BYTES", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    config = get_config()

    assert config.stream_chunk_size_bytes == 65536
    assert config.port == 3000


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIDEO_SERVER_STREAM_CHUNK_SIZE_BYTES", "4096")
    monkeypatch.setenv("VIDEO_SERVER_MEDIA_ROOT", "/srv/media")
    monkeypatch.setenv("LOKI_ENABLED", "TRUE")
    monkeypatch.setenv("PORT", "8080")

    config = get_config()

    assert config.stream_chunk_size_bytes == 4096
    assert config.media_root == "/srv/media"
    assert config.loki_enabled is True
    assert config.port == 8080


def test_blank_environment_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "  ")

    with pytest.raises(ValueError, match="ENVIRONMENT"):
        get_config()


def test_non_positive_chunk_size_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIDEO_SERVER_STREAM_CHUNK_SIZE_BYTES", "0")

    with pytest.raises(ValueError, match="chunk size"):
        get_config()
