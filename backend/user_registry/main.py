"""User Registry API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery - ExMA anti-pattern)
    - Global error handlers map UserRegistryError → structured JSON responses
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_registry.api.error_handlers import register_error_handlers
from user_registry.api.routes import health, users
from user_registry.config import get_settings
from user_registry.infrastructure.database import init_db
from user_registry.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("User Registry API started")
    yield
    logger.info("User Registry API shutting down")
    await manager.dispose()


app = FastAPI(
    title="User Registry API", version="1.0.0", lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
