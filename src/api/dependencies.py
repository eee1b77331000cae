"""FastAPI dependency injection helpers: one session per request, repositories on top."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import async_session_factory
from src.infrastructure.repositories import (
    AircraftRepository,
    AirportRepository,
    BorderRepository,
    CountryRepository,
)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield a read-only DB session; roll back if the handler raises."""
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_airports(db: AsyncSession = Depends(get_db)) -> AirportRepository:
    return AirportRepository(db)


def get_aircraft(db: AsyncSession = Depends(get_db)) -> AircraftRepository:
    return AircraftRepository(db)


def get_countries(db: AsyncSession = Depends(get_db)) -> CountryRepository:
    return CountryRepository(db)


def get_borders(db: AsyncSession = Depends(get_db)) -> BorderRepository:
    return BorderRepository(db)
