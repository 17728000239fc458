from video_server.media.errors import MalformedRangeError
from video_server.media.errors import MediaError
from video_server.media.errors import MediaIOError
from video_server.media.errors import MediaNotFoundError
from video_server.media.errors import RangeNotSatisfiableError
from video_server.media.errors import media_error_response
from video_server.media.file_meta import resolve_file
from video_server.media.range_planner import plan_stream
from video_server.media.range_utils import parse_range_header
from video_server.media.streamer import iter_file_range
from video_server.media.streamer import stream_file_response


__all__ = [
    "MalformedRangeError",
    "MediaError",
    "MediaIOError",
    "MediaNotFoundError",
    "RangeNotSatisfiableError",
    "iter_file_range",
    "media_error_response",
    "parse_range_header",
    "plan_stream",
    "resolve_file",
    "stream_file_response",
]
