"""Main application module for the video server."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from typing import Iterable
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from fastapi.responses import JSONResponse

from video_server.api.middlewares import cors_middleware
from video_server.api.middlewares import ray_id_middleware
from video_server.api.videos import router as videos_router
from video_server.catalog import DEFAULT_VIDEOS
from video_server.catalog import Catalog
from video_server.catalog import VideoEntry
from video_server.config import Config
from video_server.config import get_config
from video_server.logging_config import setup_loki_logging
from video_server.media import MediaError
from video_server.media import MediaNotFoundError
from video_server.media import media_error_response


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI application lifespan handler."""
    config = app.state.config
    logger.info(
        f"Video server ready environment={config.environment} media_root={app.state.catalog.media_root} "
        f"videos={len(app.state.catalog)} chunk_size={config.stream_chunk_size_bytes}"
    )
    try:
        yield
    finally:
        logger.info("Video server shutting down")


def factory(config: Optional[Config] = None, videos: Iterable[VideoEntry] = DEFAULT_VIDEOS) -> FastAPI:
    """Factory function to create and configure the FastAPI application."""
    load_dotenv()
    config = config or get_config()
    setup_loki_logging(config)

    app = FastAPI(
        title="Video Server",
        description="Video catalog and range-capable media streaming",
        lifespan=lifespan,
        debug=config.debug,
        default_response_class=Response,
    )

    # Built once; handlers only read it
    app.state.config = config
    app.state.catalog = Catalog(config.media_root, videos)

    @app.exception_handler(MediaError)
    async def media_exception_handler(request: Request, exc: MediaError) -> Response:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
        return media_error_response(exc)

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> Response:
        logger.info(f"No route for {request.method} {request.url.path}")
        return media_error_response(MediaNotFoundError(f"No route for {request.url.path}"))

    @app.get("/health", include_in_schema=False, response_class=JSONResponse)
    async def health() -> JSONResponse:
        """Health check endpoint for monitoring."""
        return JSONResponse(content={"status": "healthy"})

    app.include_router(videos_router, prefix="")

    # middleware("http") executes in REVERSE order: ray id runs first
    app.middleware("http")(cors_middleware)
    app.middleware("http")(ray_id_middleware)

    return app
