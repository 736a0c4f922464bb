"""Database Session Manager — async engine and sessions for the key-value table.

Invariants:
    - Every session rolls back on a SQLAlchemy failure; nothing partial is committed
    - SQLAlchemy failures surface as DatabaseError; OperationalError (locked file,
      missing table, dropped connection) is reported as "connect", the rest as "execute"
    - create_schema is idempotent (create_all skips existing tables)
    - dialect_name is the SQLAlchemy dialect ("sqlite" or "postgresql"); adapters
      pick dialect-specific statements from it

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only for server databases; SQLite picks its own pool class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from translator.core.errors import DatabaseError
from translator.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the async engine behind the key-value storage table."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 5,
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

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session; roll back and raise DatabaseError on failure."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            if isinstance(e, OperationalError):
                operation, message = "connect", "Database unavailable"
            else:
                operation, message = "execute", "Statement rejected"
            logger.error(
                f"Storage database error: {e}",
                extra={"operation": operation},
            )
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables. No migrations; the schema has one version."""
        # Registers StorageItem on Base.metadata
        import translator.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager
