"""
Noteful API: Database Lifecycle and Session Management
=======================================================

What:  The `Database` object (async engine + session factory), the ORM base
       class, and the FastAPI dependency that hands out one session per request.
How:   `create_app()` builds a `Database` from settings, or accepts one that a
       caller built (tests, the seeder) and stores it on `app.state.database`.
       Routes reach it through `get_database` / `get_db_session`; nothing
       imports a module-level engine.

Connection Pooling:
    Server databases (PostgreSQL/asyncpg) get a sized pool with pre-ping and
    hourly recycling. SQLite URLs skip the pool arguments because the SQLite
    dialects choose their own pool class.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteful.config import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives create_all and Alembic."""
    pass


class Database:
    """
    Owns the engine and session factory for one database.

    Lifecycle:
        db = Database.from_settings(settings)   # no connection is opened yet
        async with db.session() as session: ...  # commit on success, rollback on error
        await db.dispose()                       # on shutdown
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            # SQLite ignores ON DELETE actions unless asked per connection
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        # expire_on_commit=False so response models can read attributes
        # after the request session commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "Database":
        engine_kwargs: dict = {"echo": config.log_level == "DEBUG"}
        if not config.is_sqlite:
            engine_kwargs.update(
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_pre_ping=config.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(config.database_url, **engine_kwargs)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yields a session that commits when the block exits cleanly.

        Any exception rolls the transaction back and is re-raised so the
        global error handler can respond.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Creates every table registered on Base.metadata."""
        import noteful.models  # noqa: F401  (registers the mappers)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import noteful.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Runs SELECT 1; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """Closes every pooled connection."""
        await self.engine.dispose()


# ── FastAPI Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides the request's database session.

    The transaction commits after the route returns and rolls back if the
    route (or a later dependency) raises.
    """
    async with get_database(request).session() as session:
        yield session
