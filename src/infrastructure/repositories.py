"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
exact-match lookups only.  The routing core never sees a session: the
distance endpoint reads coordinates and border rings here and hands plain
values to ``compute_route``.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .geojson import rings_from_geojson
from .models import AircraftModel, AirportModel, CountryBordersModel, CountryModel
from src.domain.entities import Coordinate
from src.domain.polygons import Polygon


class AirportNotFoundError(LookupError):
    """An IATA code did not resolve to an airport."""


class CountryNotFoundError(LookupError):
    """A country code did not resolve to a country / border record."""


class AirportRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_iata(self, iata: str) -> Optional[AirportModel]:
        return await self.session.get(AirportModel, iata.strip().upper())

    async def get_coordinate(self, iata: str, role: str = "airport") -> Coordinate:
        """Resolve an IATA code to a ``Coordinate`` or raise NotFound."""
        airport = await self.get_by_iata(iata)
        if airport is None:
            raise AirportNotFoundError(f"{role} airport not found: {iata}")
        return Coordinate(airport.latitude, airport.longitude)

    async def list(
        self,
        iata: str | None = None,
        continent: str | None = None,
        country: str | None = None,
    ) -> list[AirportModel]:
        query = select(AirportModel).order_by(AirportModel.iata)
        if iata:
            query = query.where(AirportModel.iata == iata)
        if continent:
            query = query.where(AirportModel.continent == continent)
        if country:
            query = query.where(AirportModel.country == country)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class AircraftRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(
        self, manufacturer: str | None = None, aircraft_type: str | None = None
    ) -> list[AircraftModel]:
        query = select(AircraftModel).order_by(AircraftModel.id)
        if manufacturer:
            query = query.where(AircraftModel.manufacturer == manufacturer)
        if aircraft_type:
            query = query.where(AircraftModel.type == aircraft_type)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class CountryRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self, continent: str | None = None) -> list[CountryModel]:
        query = select(CountryModel).order_by(CountryModel.code)
        if continent:
            query = query.where(CountryModel.continent == continent)
        result = await self.session.execute(query)
        countries = list(result.scalars().all())
        if not countries:
            raise CountryNotFoundError("countries not found")
        return countries

    async def get_borders(self, code: str) -> CountryBordersModel:
        borders = await self.session.get(CountryBordersModel, code.strip().upper())
        if borders is None:
            raise CountryNotFoundError(f"country not found: {code}")
        return borders


class BorderRepository:
    """Border provider for the route planner: country code -> rings."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def polygons_for(self, codes: Iterable[str]) -> dict[str, list[Polygon]]:
        wanted = {c.strip().upper() for c in codes if c and c.strip()}
        if not wanted:
            return {}
        result = await self.session.execute(
            select(CountryBordersModel).where(CountryBordersModel.code.in_(wanted))
        )
        return {
            row.code: rings_from_geojson(row.borders) for row in result.scalars().all()
        }
