import dataclasses

import dotenv

from video_server.utils import env
from video_server.utils import env_bool


dotenv.load_dotenv()


@dataclasses.dataclass
class Config:
    """Application configuration settings."""

    # Server Configuration
    host: str = env("HOST:0.0.0.0")
    port: int = env("PORT:3000", convert=int)
    environment: str = env("ENVIRONMENT:development")
    debug: bool = env("DEBUG:false", convert=env_bool)

    # Logging
    log_level: str = env("LOG_LEVEL:INFO")
    loki_url: str = env("LOKI_URL:", convert=str)
    loki_enabled: bool = env("LOKI_ENABLED:false", convert=env_bool)

    # Media storage: catalog urls are resolved against this directory
    media_root: str = env("VIDEO_SERVER_MEDIA_ROOT:.")

    # Bytes read from disk per streaming step; bounds per-request memory
    stream_chunk_size_bytes: int = env("VIDEO_SERVER_STREAM_CHUNK_SIZE_BYTES:65536", convert=int)


def get_config() -> Config:
    """Get application configuration."""
    cfg = Config()

    env_value = getattr(cfg, "environment", None)
    if not env_value or not env_value.strip():
        raise ValueError("ENVIRONMENT variable is required but not set or empty")

    if cfg.stream_chunk_size_bytes <= 0:
        raise ValueError(f"Invalid stream chunk size: {cfg.stream_chunk_size_bytes}")

    object.__setattr__(cfg, "environment", env_value.strip())
    return cfg
