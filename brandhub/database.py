"""
Database engine and session handling.

Postgres (asyncpg) in deployments, SQLite (aiosqlite) for local runs and
tests. Services own their transactions; the request session is only opened,
rolled back on error and closed here.

SECURITY:
- SQL echo is never enabled in production
- The connection URL is never logged
"""

import logging
import time

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from brandhub.config import settings

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 500


def engine_options(database_url: str) -> dict:
    """Engine keyword arguments for the backend named in database_url."""
    options = {"echo": settings.sqlalchemy_echo, "future": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        return options
    options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=3600,
        pool_pre_ping=True,
    )
    return options


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info["query_start_time"] = time.monotonic()


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    start = conn.info.pop("query_start_time", None)
    if start is None:
        return
    duration_ms = (time.monotonic() - start) * 1000
    if duration_ms >= SLOW_QUERY_THRESHOLD_MS:
        # Statement text only; bound parameters can hold emails and hashes
        first_line = statement.strip().splitlines()[0][:120]
        logger.warning(
            "Slow query (%.0fms): %s",
            duration_ms,
            first_line,
            extra={"duration_ms": round(duration_ms)},
        )


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine with slow-query logging attached."""
    new_engine = create_async_engine(database_url, **engine_options(database_url))
    event.listen(new_engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(new_engine.sync_engine, "after_cursor_execute", _after_cursor_execute)
    return new_engine


engine = build_engine(settings.DATABASE_URL)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for the brand console tables."""


async def get_db() -> AsyncSession:
    """Request-scoped session; anything left uncommitted is rolled back."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create missing tables. Development only; deployments run Alembic."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
