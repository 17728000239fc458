import logging
import os
import sys
from typing import Protocol

from loki_logger_handler.loki_logger_handler import LokiLoggerHandler

from video_server.services.ray_id_service import ray_id_context


SERVICE_NAME = "video-server"

ACCESS_LOGGER = "uvicorn.access"


class LoggingConfig(Protocol):
    log_level: str
    loki_enabled: bool
    loki_url: str
    environment: str
    debug: bool


class RayIDFilter(logging.Filter):
    """Ensures every record has a ray_id, falling back to the request contextvar."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "ray_id"):
            record.ray_id = ray_id_context.get()
        return True


def setup_loki_logging(
    config: LoggingConfig, service_name: str = SERVICE_NAME, include_ray_id: bool = True
) -> logging.Logger:
    """
    Configure stdout logging, plus a Loki handler when enabled.

    Args:
        config: Application configuration
        service_name: Loki "service" label and name of the returned logger
        include_ray_id: Whether to include ray_id in log format (default: True)

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if config.loki_enabled and config.loki_url:
        loki_handler = LokiLoggerHandler(
            url=config.loki_url,
            labels={
                "service": service_name,
                "environment": config.environment,
                "host": os.getenv("HOSTNAME", "unknown"),
            },
            timeout=10,
            compressed=True,
        )
        handlers.append(loki_handler)

    if include_ray_id:
        ray_id_filter = RayIDFilter()
        for handler in handlers:
            handler.addFilter(ray_id_filter)
        log_format = "%(asctime)s - [%(ray_id)s] - %(name)s - %(levelname)s - %(message)s"
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=handlers,
    )

    # Range requests arrive once per seek; handlers log each with its ray id
    if not config.debug:
        logging.getLogger(ACCESS_LOGGER).setLevel(logging.WARNING)

    return logging.getLogger(service_name)
