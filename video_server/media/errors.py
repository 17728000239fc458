"""Error taxonomy for media lookups and byte streaming."""

from __future__ import annotations

from fastapi import Response


class MediaError(Exception):
    """Base class for errors raised while locating or streaming media."""

    code = "InternalError"
    status_code = 500

    def __init__(self, message: str = "", *, code: str | None = None, status_code: int | None = None):
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.message = message or f"Media error: {self.code}"
        super().__init__(self.message)


class MediaNotFoundError(MediaError):
    """Unknown catalog id, missing file, or a path that is not a regular file."""

    code = "NotFound"
    status_code = 404


class MediaIOError(MediaError):
    """Storage failure.

    Before headers are sent this collapses to a 404 for the client. Once the
    body has started it aborts the stream and the connection is dropped.
    """

    code = "IOError"
    status_code = 404


class MalformedRangeError(MediaError, ValueError):
    """Unparseable Range header. Never reaches the client: the request is served in full."""

    code = "MalformedRange"
    status_code = 400


class RangeNotSatisfiableError(MediaError):
    code = "RangeNotSatisfiable"
    status_code = 416

    def __init__(self, file_size: int, message: str = ""):
        self.file_size = file_size
        super().__init__(message or f"Requested range not satisfiable for {file_size} byte resource")


_STATUS_TEXT = {
    404: "404 Not Found",
    416: "416 Range Not Satisfiable",
}


def media_error_response(exc: MediaError) -> Response:
    """Render a media error as a plain-text response without any range headers,
    except the unsatisfied-range marker a 416 requires."""
    status_code = exc.status_code if exc.status_code in _STATUS_TEXT else 404
    headers = {"Access-Control-Allow-Origin": "*"}
    if isinstance(exc, RangeNotSatisfiableError):
        headers["Content-Range"] = f"bytes */{exc.file_size}"
    return Response(
        content=_STATUS_TEXT[status_code],
        status_code=status_code,
        media_type="text/plain",
        headers=headers,
    )
