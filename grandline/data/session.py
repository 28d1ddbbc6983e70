"""
Engine and session lifecycle.

One process-wide async engine is created by ``init_db`` at startup and
disposed by ``close_db``. Every game operation runs in exactly one
``AsyncSession``: ``get_session`` for API requests, ``session_scope`` for
scheduled AI turns and the CLI. Both commit when the block finishes and
roll back if it raises.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from grandline.data.config import DatabaseSettings, get_settings
from grandline.data.models import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    if _engine is None:
        raise RuntimeError("No database engine; init_db() has not run")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("No session factory; init_db() has not run")
    return _session_factory


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded rows readable after commit and flush only when asked."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _prepare_sqlite_connection(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Transactions are opened by _begin_immediate, not by the driver
    dbapi_connection.isolation_level = None


def _begin_immediate(conn) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def configure_sqlite_engine(engine: AsyncEngine) -> None:
    """
    Serialize SQLite transactions.

    SQLite ignores ``SELECT ... FOR UPDATE``. Taking the write lock when the
    transaction starts makes a second turn wait until the first commits and
    then read the state it left behind.
    """
    event.listen(engine.sync_engine, "connect", _prepare_sqlite_connection)
    event.listen(engine.sync_engine, "begin", _begin_immediate)


async def init_db(settings: Optional[DatabaseSettings] = None) -> None:
    """Create the engine and session factory from ``settings``."""
    global _engine, _session_factory

    settings = settings or get_settings()
    # Never log credentials: keep only the part after the last "@"
    logger.info(f"Connecting to database: {settings.database_url.split('@')[-1]}")

    _engine = create_async_engine(settings.database_url, **settings.get_engine_kwargs())
    if settings.is_sqlite:
        configure_sqlite_engine(_engine)
    _session_factory = make_session_factory(_engine)


async def close_db() -> None:
    """Dispose of the engine. Safe to call when ``init_db`` never ran."""
    global _engine, _session_factory

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database connection closed")


async def create_tables() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Game tables ready")


async def drop_tables() -> None:
    """Drop every game table. Destroys all games."""
    logger.warning("Dropping all game tables")
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding the request's unit of work.

    The session commits after the endpoint returns; an exception from the
    endpoint rolls it back and is re-raised for the exception handlers.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def session_scope(
    factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Same unit of work as ``get_session`` for code outside a request.

        async with session_scope() as session:
            await TurnEngine(GameRepository(session), scheduler).process_ai_turn(game_id, player_id)

    ``factory`` defaults to the one created by ``init_db``.
    """
    factory = factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
