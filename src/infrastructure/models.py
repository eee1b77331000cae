"""
SQLAlchemy ORM models.

Tables
------
* ``airports``         -- IATA-keyed airports with coordinates
* ``aircraft``         -- aircraft catalogue with range in km
* ``countries``        -- ISO country codes grouped by continent
* ``country_borders``  -- one GeoJSON document per country

Indexes
-------
* **B-Tree** on the exact-match filter columns (``continent``,
  ``country``, ``manufacturer``, ``type``) used by the lookup endpoints.
"""

from sqlalchemy import JSON, Column, Enum, Float, ForeignKey, Index, Integer, String

from .database import Base
from src.domain.enums import AircraftType, Manufacturer


def _enum_values(enum_cls) -> list[str]:
    # store "commercial", not "COMMERCIAL"
    return [m.value for m in enum_cls]


class AirportModel(Base):
    __tablename__ = "airports"

    iata = Column(String(3), primary_key=True)
    name = Column(String(255), nullable=False)
    city = Column(String(120), nullable=False)
    country = Column(String(120), nullable=False)
    continent = Column(String(60), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    __table_args__ = (
        Index("idx_airports_country", "country"),
        Index("idx_airports_continent", "continent"),
    )


class AircraftModel(Base):
    __tablename__ = "aircraft"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(Enum(AircraftType, values_callable=_enum_values), nullable=False)
    name = Column(String(120), nullable=False)
    manufacturer = Column(
        Enum(Manufacturer, values_callable=_enum_values), nullable=False
    )
    range = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_aircraft_manufacturer", "manufacturer"),
        Index("idx_aircraft_type", "type"),
    )


class CountryModel(Base):
    __tablename__ = "countries"

    code = Column(String(3), primary_key=True)
    name = Column(String(120), nullable=False)
    continent = Column(String(60), nullable=False)

    __table_args__ = (Index("idx_countries_continent", "continent"),)


class CountryBordersModel(Base):
    __tablename__ = "country_borders"

    code = Column(String(3), ForeignKey("countries.code"), primary_key=True)

    # GeoJSON FeatureCollection, coordinates in [lng, lat] order
    borders = Column(JSON, nullable=False)
