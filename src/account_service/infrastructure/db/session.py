"""Async SQLAlchemy session factory helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


def create_session_factory(
    database_url: str,
    *,
    pool_size: int | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for the provided database URL.

    `pool_size` caps pooled connections for server databases; SQLite keeps the
    driver's default pool.
    """

    engine_options: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None and make_url(database_url).get_backend_name() != "sqlite":
        engine_options["pool_size"] = pool_size
        engine_options["max_overflow"] = 0

    engine = create_async_engine(database_url, **engine_options)
    return async_sessionmaker(engine, expire_on_commit=False)


async def dispose_session_factory(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Close every pooled connection held by the factory's engine."""

    engine = session_factory.kw.get("bind")
    if engine is not None:
        await engine.dispose()
