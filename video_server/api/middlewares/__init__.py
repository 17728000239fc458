from video_server.api.middlewares.cors import cors_middleware
from video_server.api.middlewares.ray_id import ray_id_middleware


__all__ = [
    "cors_middleware",
    "ray_id_middleware",
]
