"""Database Session Manager — async engine, per-request sessions and readiness check.

Invariants:
    - A session that raises is rolled back and closed before the error leaves
    - SQLAlchemy exceptions leave as DatabaseError, the original chained and its
      text kept in context.debug_info (logs only, never the response)
    - The manager lives on app.state; it is built at startup and disposed at shutdown

Design Decisions:
    - expire_on_commit=False: rows stay readable after commit without a refresh
    - from_engine(): lets the seed script and tests wrap an engine they already own
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError, ErrorContext

logger = logging.getLogger(__name__)

# Most specific first; SQLAlchemyError catches the rest.
_ERROR_MAP = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "session"),
)


def _describe(exc: SQLAlchemyError) -> tuple[str, str]:
    for exc_type, message, operation in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return message, operation
    return "Database operation failed", "session"


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        pool_args = {}
        if not database_url.startswith("sqlite"):
            pool_args = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        self._bind(create_async_engine(database_url, **pool_args))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back and translate SQLAlchemy errors."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _describe(e)
            logger.error(
                f"{message}: {e}",
                extra={"error_code": "DATABASE_ERROR", "operation": operation},
            )
            raise DatabaseError(
                message, operation,
                ErrorContext(operation=operation, debug_info={"driver_error": str(e)}),
            ) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning(f"DB health check failed: {e}")
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """Dependency: the session manager the lifespan put on app.state."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency: one session per request."""
    async with get_db_manager(request).session() as session:
        yield session
