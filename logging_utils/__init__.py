"""Logging utilities for the storefront service."""

from .config import get_store_logger, setup_service_logger
from .middleware import RequestLoggingMiddleware

__all__ = [
    "setup_service_logger",
    "get_store_logger",
    "RequestLoggingMiddleware",
]
