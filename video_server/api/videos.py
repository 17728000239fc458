from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi import Response
from fastapi.responses import JSONResponse

from video_server import dependencies
from video_server.catalog import Catalog
from video_server.config import Config
from video_server.media import MediaNotFoundError
from video_server.media import media_error_response
from video_server.media import stream_file_response


logger = logging.getLogger(__name__)


def request_logger(request: Request) -> logging.Logger | logging.LoggerAdapter:
    """Per-request logger carrying the ray id, set up by the ray id middleware."""
    return getattr(request.state, "logger", logger)

VIDEO_CONTENT_TYPE = "video/mp4"
THUMBNAIL_CONTENT_TYPE = "image/png"

router = APIRouter()


@router.get("/", response_class=JSONResponse)
async def root(request: Request) -> JSONResponse:
    request_logger(request).info(f"Received request for {request.url.path}")
    return JSONResponse(content={"message": "Welcome to the Video Server API"})


@router.get("/favicon.ico", include_in_schema=False)
async def favicon(request: Request) -> Response:
    request_logger(request).info(f"Received request for {request.url.path}")
    return media_error_response(MediaNotFoundError("No favicon"))


@router.get("/api", response_class=JSONResponse)
async def list_videos(
    request: Request,
    catalog: Catalog = Depends(dependencies.get_catalog),
) -> JSONResponse:
    request_logger(request).info(f"Received request for {request.url.path}")
    videos = [entry.model_dump(by_alias=True, mode="json") for entry in catalog.videos()]
    return JSONResponse(content={"videos": videos})


@router.api_route("/api/videos/{video_id}", methods=["GET", "HEAD"])
async def get_video(
    video_id: str,
    request: Request,
    catalog: Catalog = Depends(dependencies.get_catalog),
    config: Config = Depends(dependencies.get_config),
) -> Response:
    request_logger(request).info(f"Received request for {request.url.path} range={request.headers.get('range')!r}")
    path = catalog.video_path(video_id)
    return await stream_file_response(
        path,
        VIDEO_CONTENT_TYPE,
        request.headers.get("range"),
        chunk_size=config.stream_chunk_size_bytes,
        method=request.method,
    )


@router.api_route("/api/thumbnails/{video_id}", methods=["GET", "HEAD"])
async def get_thumbnail(
    video_id: str,
    request: Request,
    catalog: Catalog = Depends(dependencies.get_catalog),
    config: Config = Depends(dependencies.get_config),
) -> Response:
    request_logger(request).info(f"Received request for {request.url.path} range={request.headers.get('range')!r}")
    path = catalog.thumbnail_path(video_id)
    return await stream_file_response(
        path,
        THUMBNAIL_CONTENT_TYPE,
        request.headers.get("range"),
        chunk_size=config.stream_chunk_size_bytes,
        method=request.method,
    )
