"""Main entry point for the Storefront Service."""

import uvicorn

from storefront_service.config import get_settings
from storefront_service.logger import configure_logging, logger
from storefront_service.server import app


def run() -> None:
    """Validate settings and serve the app; exits early if MONGODB_URI is unset."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"server running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
