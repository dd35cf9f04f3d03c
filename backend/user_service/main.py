"""User Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage handle created, connected, and disconnected by the lifespan, held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, users
from user_service.config import get_settings
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    db_manager.connect()
    if settings.database_create_schema:
        await db_manager.create_schema()
    app.state.db_manager = db_manager
    logger.info("User Service API started")
    try:
        yield
    finally:
        logger.info("User Service API shutting down")
        await db_manager.disconnect()
        app.state.db_manager = None


app = FastAPI(
    title="User Service API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
