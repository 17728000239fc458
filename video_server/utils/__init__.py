"""Utility modules and functions for video_server."""

# Explicit imports only - no star imports to avoid namespace pollution
from video_server.utils.core import env  # noqa: F401
from video_server.utils.core import env_bool  # noqa: F401
from video_server.utils.timing import async_timing_context  # noqa: F401
from video_server.utils.timing import log_timing  # noqa: F401


__all__ = [
    # From core.py
    "env",
    "env_bool",
    # From timing.py
    "async_timing_context",
    "log_timing",
]
