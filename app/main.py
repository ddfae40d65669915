import logging

from fastapi import FastAPI

from app.api.router import api_router
from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(title=settings.app_name, debug=settings.debug)
    register_error_handlers(application)
    application.include_router(api_router, prefix="/api")

    @application.get("/health", tags=["health"])
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("%s configured", settings.app_name)
    return application


app = create_app()
