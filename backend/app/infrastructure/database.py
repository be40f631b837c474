"""Mahasiswa Database: engine, request sessions, and SQLAlchemy failure mapping.

Invariants:
    - A request session that raises never commits: close() discards the transaction
    - Any SQLAlchemyError leaving a request session surfaces as DatabaseError (503),
      tagged with the operation that failed; driver text stays in the logs
    - Errors the store already translated (ValidationFailedError, ResourceNotFoundError)
      pass through untouched
    - get_db() refuses to hand out sessions before init_db() ran

Design Decisions:
    - Module-level db_manager set by the lifespan, so tests can swap in their own engine
    - expire_on_commit=False: a created/updated Mahasiswa is serialized after commit
    - Pool sizing only for PostgreSQL; SQLite (tests, local dev) keeps its default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.core.errors import DatabaseError
from app.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_OPERATIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Integrity constraint violated"),
    (OperationalError, "execute", "Connection or operational error"),
    (DBAPIError, "query", "Database driver error"),
)


def classify_failure(exc: SQLAlchemyError) -> tuple[str, str]:
    """(operation, summary) for a SQLAlchemy error escaping a request session."""
    for kind, operation, summary in _FAILURE_OPERATIONS:
        if isinstance(exc, kind):
            return operation, summary
    return "unknown", "Database operation failed"


class DatabaseSessionManager:
    """Owns the engine behind the mahasiswas table and hands out request sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation, summary = classify_failure(e)
            logger.error(
                f"{summary} during {operation}: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(summary, operation) from e
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """create_all for SQLite/dev (DATABASE_CREATE_TABLES); Alembic owns PostgreSQL."""
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """SELECT 1 for /health/ready; any failure means not ready."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session for MahasiswaStore."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
