import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings

logger = logging.getLogger(__name__)


def _get_database_url() -> str:
    url = settings.database_url
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _is_sqlite() -> bool:
    return settings.database_url.startswith("sqlite")


_database_url = _get_database_url()

_engine_kwargs: dict = {"echo": False}
if _is_sqlite():
    # aiosqlite connections are bound to the loop that opened them
    _engine_kwargs.update(poolclass=NullPool)
else:
    _engine_kwargs.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )

engine = create_async_engine(_database_url, **_engine_kwargs)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

if _is_sqlite():
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@event.listens_for(engine.sync_engine, "before_cursor_execute")
def _start_query_timer(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.perf_counter())


@event.listens_for(engine.sync_engine, "after_cursor_execute")
def _log_query(conn, cursor, statement, parameters, context, executemany):
    duration_ms = (time.perf_counter() - conn.info["query_start_time"].pop()) * 1000
    logger.debug("Executed query in %.1fms (rows=%s): %s", duration_ms, cursor.rowcount, statement)


@event.listens_for(engine.sync_engine, "handle_error")
def _log_query_error(context):
    logger.error("Query error: %s (%s)", context.statement, context.original_exception)


class Base(DeclarativeBase):
    pass


async def create_tables():
    async with engine.begin() as conn:
        from app.models import car, mechanic, service, user  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    await engine.dispose()


async def get_db():
    async with async_session() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run the block as one unit of work on ``session``.

    Commits when the block exits cleanly. Any exception rolls back and
    propagates.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
