import logging

from fastapi import FastAPI

from user_directory.api.v1.routers import users
from user_directory.core.config import settings

logger = logging.getLogger(__name__)


def bootstrap_app(app: FastAPI) -> None:
    """Mount the resource routers under the configured prefix."""
    prefix = settings.API_PREFIX.rstrip("/")

    app.include_router(users.router, prefix=prefix, tags=["Users"])
    logger.info(f"Routers mounted under '{prefix or '/'}'")
