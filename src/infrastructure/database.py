"""
Async SQLAlchemy engine and session factory.

Uses ``asyncpg`` as the PostgreSQL driver for non-blocking I/O.  The
database only backs the lookup collaborators (airports, aircraft,
countries, borders); route computation never touches it.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_size=10,
    max_overflow=5,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every mapped table that does not exist yet (no migrations)."""
    # models register themselves on Base.metadata when imported
    from src.infrastructure import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
