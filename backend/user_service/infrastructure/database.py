"""Database Session Manager — explicit async storage handle with rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - The manager is owned by the FastAPI app (app.state.db_manager), never a module global

Design Decisions:
    - connect()/disconnect() called from the lifespan: the handle's lifecycle is visible
      at the call site and tests can build their own manager against SQLite
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from user_service.core.errors import DatabaseError
from user_service.db.base import Base

logger = logging.getLogger(__name__)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Map a SQLAlchemy failure to the domain DatabaseError."""
    if isinstance(exc, IntegrityError):
        return DatabaseError("Integrity constraint violated", "commit")
    if isinstance(exc, OperationalError):
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the async engine: connect, hand out sessions, health-check, disconnect."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        """Create the engine and session factory. Idempotent."""
        if self.engine is not None:
            return
        engine_kwargs: dict = {"pool_pre_ping": True}
        # SQLite uses a static/null pool that rejects sizing arguments
        if not self.database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(self.database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def disconnect(self) -> None:
        """Dispose the engine and drop pooled connections."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    async def create_schema(self) -> None:
        """Create all tables (local runs and tests; production uses alembic)."""
        if self.engine is None:
            raise RuntimeError("Database not connected")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        if self._session_factory is None:
            raise RuntimeError("Database not connected")
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error: {e}")
            raise to_database_error(e) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if db_manager is None or not db_manager.is_connected:
        raise DatabaseError("Database not initialized", "connect")
    async with db_manager.session() as session:
        yield session
