"""
Idea Board – Async SQLAlchemy store handle, session dependency, and declarative base.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import DateTime, event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime on every backend.

    SQLite stores datetimes without an offset, so values read back are tagged
    as UTC here; aware values are converted to UTC before they are written.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one database URL.

    Construct it explicitly, call ``init()`` before serving requests and
    ``shutdown()`` when done. Services never reach for a global handle; they
    receive an ``AsyncSession`` opened from this object.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database.init() has not been called")
        return self._engine

    async def init(self) -> None:
        """Create the engine and make sure every table exists."""
        if self._engine is not None:
            return

        engine_kwargs = {
            "echo": self.echo,
            "future": True,
        }

        # If using PostgreSQL behind PgBouncer (transaction mode), disable
        # prepared statement caching.
        if "postgresql" in self.url:
            engine_kwargs["connect_args"] = {"statement_cache_size": 0}

        self._engine = create_async_engine(self.url, **engine_kwargs)

        # SQLite only enforces foreign keys when asked, per connection.
        if self.url.startswith("sqlite"):
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        # Register the mapped classes on Base.metadata before create_all.
        import ideaboard.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready at %s", self._engine.url.render_as_string(hide_password=True))

    async def shutdown(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database connections closed")

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database.init() has not been called")
        return self._sessionmaker()


# ── Dependency for FastAPI routes ──
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async session from the app's Database, auto-closed on exit."""
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
