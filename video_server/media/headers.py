from __future__ import annotations

from video_server.media.types import StreamPlan


def build_stream_headers(plan: StreamPlan, content_type: str) -> dict[str, str]:
    headers: dict[str, str] = {
        "Content-Type": content_type,
        "Content-Length": str(plan.content_length),
        "Accept-Ranges": "bytes",
        "Access-Control-Allow-Origin": "*",
    }
    if plan.content_range is not None:
        start, end, total = plan.content_range
        headers["Content-Range"] = f"bytes {start}-{end}/{total}"
        headers["Connection"] = "keep-alive"
    return headers
