from fastapi import Request

from video_server.catalog import Catalog
from video_server.config import Config


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog
