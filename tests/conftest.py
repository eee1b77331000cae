"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  The production models carry no dialect-specific
columns, so the real metadata is created directly.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.domain.entities import Coordinate
from src.domain.enums import AircraftType, Manufacturer
from src.domain.polygons import Polygon
from src.infrastructure.database import create_tables
from src.infrastructure.models import (
    AircraftModel,
    AirportModel,
    CountryBordersModel,
    CountryModel,
)

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


def ring(*latlngs: tuple[float, float]) -> Polygon:
    return Polygon([Coordinate(lat, lng) for lat, lng in latlngs])


def feature_collection(*rings: list[tuple[float, float]]) -> dict:
    """(lat, lng) rings -> GeoJSON FeatureCollection in [lng, lat] order."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[lng, lat] for lat, lng in r + [r[0]]]],
                },
            }
            for r in rings
        ],
    }


# A 10x10 degree square straddling the equator / prime meridian
SQUARE = [(-5.0, -5.0), (-5.0, 5.0), (5.0, 5.0), (5.0, -5.0)]

# Rough outline straddling the antimeridian
FIJI = [(-16.0, 177.0), (-16.0, -179.5), (-19.2, -179.5), (-19.2, 177.0)]


@pytest.fixture
def square() -> Polygon:
    return ring(*SQUARE)


@pytest.fixture
def fiji() -> Polygon:
    return ring(*FIJI)


# ── DB fixtures ───────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database with a small seeded dataset."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    await create_tables(engine)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            [
                AirportModel(iata="JFK", name="John F. Kennedy International Airport", city="New York", country="USA", continent="North America", latitude=40.6413, longitude=-73.7781),
                AirportModel(iata="LAX", name="Los Angeles International Airport", city="Los Angeles", country="USA", continent="North America", latitude=33.9416, longitude=-118.4085),
                AirportModel(iata="CDG", name="Charles de Gaulle Airport", city="Paris", country="France", continent="Europe", latitude=49.0097, longitude=2.5479),
                AirportModel(iata="WST", name="West Field", city="West", country="Testland", continent="Africa", latitude=0.0, longitude=-20.0),
                AirportModel(iata="EST", name="East Field", city="East", country="Testland", continent="Africa", latitude=0.0, longitude=20.0),
                AirportModel(iata="MID", name="Middle Field", city="Middle", country="Squareland", continent="Africa", latitude=0.0, longitude=0.0),
                AircraftModel(type=AircraftType.COMMERCIAL, name="Boeing 737", manufacturer=Manufacturer.BOEING, range=3510),
                AircraftModel(type=AircraftType.HEAVY, name="Gulfstream G650", manufacturer=Manufacturer.GULFSTREAM, range=7500),
                AircraftModel(type=AircraftType.COMMERCIAL, name="Airbus A320", manufacturer=Manufacturer.AIRBUS, range=3200),
                CountryModel(code="SQR", name="Squareland", continent="Africa"),
                CountryModel(code="FJI", name="Fiji", continent="Oceania"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                CountryBordersModel(code="SQR", borders=feature_collection(SQUARE)),
                CountryBordersModel(code="FJI", borders=feature_collection(FIJI)),
            ]
        )
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by the seeded SQLite database."""
    from src.api.app import create_app
    from src.api.dependencies import get_db
    from src.api.middleware import limiter

    async def _test_db():
        async with session_factory() as session:
            yield session

    limiter.reset()
    app = create_app()
    app.dependency_overrides[get_db] = _test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
