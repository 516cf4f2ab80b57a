"""Media Platform API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MediaPlatformError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main.py only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from media_platform.api.error_handlers import register_error_handlers
from media_platform.api.routes import health, categories, comments, ratings
from media_platform.config import get_settings
from media_platform.infrastructure import database
from media_platform.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        isolation_level=settings.database_isolation_level,
    )
    logger.info("Media Platform API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Media Platform API shutting down")


app = FastAPI(
    title="Media Platform API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(categories.router)
app.include_router(comments.router)
app.include_router(ratings.router)

register_error_handlers(app)
