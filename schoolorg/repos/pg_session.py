"""Per-call session scope shared by the PostgreSQL repositories."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from schoolorg.services.errors import StoreError


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session, commit on success, roll back on exception.

    Each repo method is one unit of atomicity.  Driver and SQL errors are
    re-raised as StoreError so callers never see SQLAlchemy types.
    """
    try:
        async with session_factory() as session, session.begin():
            yield session
    except SQLAlchemyError as e:
        raise StoreError(f"{type(e).__name__}: {e}") from e
