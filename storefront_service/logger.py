"""Logger module for logging messages."""

import os

from logging_utils.config import get_store_logger, setup_service_logger

SERVICE_NAME = "storefront-service"

# Environment values until configure_logging applies the loaded settings
logger = setup_service_logger(
    SERVICE_NAME,
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_file=os.getenv("LOG_FILE"),
)

store_logger = get_store_logger(SERVICE_NAME)


def configure_logging(settings) -> None:
    """Re-apply the sinks using LOG_LEVEL and LOG_FILE from the loaded settings.

    Loguru sinks are global, so the loggers bound above pick up the change.
    """
    setup_service_logger(SERVICE_NAME, log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)


__all__ = ["logger", "store_logger", "configure_logging", "SERVICE_NAME"]
