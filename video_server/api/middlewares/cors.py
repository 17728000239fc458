"""CORS middleware allowing any origin to read media and catalog responses."""

import logging
from typing import Awaitable
from typing import Callable

from fastapi import Request
from fastapi import Response


logger = logging.getLogger(__name__)

# Players read these to drive seeking
EXPOSED_HEADERS = "Accept-Ranges, Content-Length, Content-Range, Content-Type, X-Ray-ID"


async def cors_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    if request.method == "OPTIONS":
        logger.debug(f"Handling OPTIONS request for {request.url.path}")
        response = Response(status_code=204)
    else:
        response = await call_next(request)

    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, HEAD, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Range"
    response.headers["Access-Control-Expose-Headers"] = EXPOSED_HEADERS
    response.headers["Access-Control-Max-Age"] = "86400"

    if request.method == "OPTIONS" and "Access-Control-Request-Headers" in request.headers:
        response.headers["Access-Control-Allow-Headers"] = request.headers["Access-Control-Request-Headers"]

    response.headers["X-Content-Type-Options"] = "nosniff"

    return response
