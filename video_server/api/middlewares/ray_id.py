from typing import Awaitable
from typing import Callable

from fastapi import Request
from fastapi import Response

from video_server.services.ray_id_service import generate_ray_id
from video_server.services.ray_id_service import get_logger_with_ray_id
from video_server.services.ray_id_service import ray_id_context


RAY_ID_HEADER = "X-Ray-ID"
REQUEST_LOGGER_NAME = "video_server.requests"


async def ray_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Ray ID middleware that generates a unique ID for each request.

    The ID is stored in the logging contextvar and on request.state, and
    returned to the client in the X-Ray-ID header.

    Register this middleware last so it executes first.
    """
    ray_id = generate_ray_id()
    ray_id_context.set(ray_id)
    request.state.ray_id = ray_id
    request.state.logger = get_logger_with_ray_id(REQUEST_LOGGER_NAME, ray_id)

    response = await call_next(request)

    response.headers[RAY_ID_HEADER] = ray_id

    return response
