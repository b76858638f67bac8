"""FastAPI application. Run with: uvicorn taletrail.main:app"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taletrail.api.errors import register_error_handlers
from taletrail.api.routes.admin import admin_router
from taletrail.api.routes.games import games_router
from taletrail.api.routes.generation import generation_router
from taletrail.api.routes.templates import templates_router
from taletrail.core.config import get_settings
from taletrail.db.database import create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the tables exist before the first request."""
    create_tables()
    logger.info("Tale and Trail API started")
    try:
        yield
    finally:
        logger.info("Stop Server")


def create_app(with_lifespan: bool = True) -> FastAPI:
    logging.basicConfig(level=get_settings().log_level)

    app = FastAPI(
        title="Tale and Trail Generator",
        lifespan=lifespan if with_lifespan else None,
    )
    register_error_handlers(app)
    app.include_router(games_router)
    app.include_router(templates_router)
    app.include_router(admin_router)
    app.include_router(generation_router)
    return app


app = create_app()
