"""
db/session.py
-------------
Async SQLAlchemy engine and session factory.

Design decisions:
  - The engine lives on an explicitly constructed Database object that the
    application factory stores on app.state; nothing here is a module-level
    singleton, so tests and scripts can build their own.
  - AsyncEngine with asyncpg driver for non-blocking I/O.
  - Postgres pool bounded by DB_POOL_SIZE + DB_MAX_OVERFLOW; callers beyond
    that wait at most DB_POOL_TIMEOUT seconds for a connection.
  - pool_pre_ping=True: validates connections before checkout to handle
    stale connections after DB restarts or idle timeouts.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context.
  - SQLite (used by the test suite) gets a single shared connection.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.db.base import Base


class Database:

    def __init__(self, url: str, echo: bool = False, **engine_kwargs) -> None:
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("poolclass", StaticPool)
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)
            engine_kwargs.setdefault("pool_recycle", 3600)  # Recycle every hour

        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        kwargs = {}
        if not settings.DATABASE_URL.startswith("sqlite"):
            kwargs = {
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
            }
        return cls(settings.DATABASE_URL, echo=settings.DEBUG, **kwargs)

    async def create_all(self) -> None:
        # Imported for its side effect of registering every table on Base.
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on any
        exception. Every write of one request therefore lands in a single
        transaction.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:  # type: ignore[return]
    """
    FastAPI dependency that yields a database session bound to the
    Database stored on the application state.

    Always declare it through DbSession: the function scope makes the
    commit run when the endpoint returns, before the response is sent, so
    a failed commit is answered with 500 instead of a premature 2xx.

    Usage:
        @router.get("/example")
        async def handler(db: DbSession):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db, scope="function")]
