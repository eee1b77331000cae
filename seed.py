"""
Seed script -- creates the tables and loads a demonstration dataset.

Run with:
    python seed.py

Creates:
  - 8 airports (North America, Europe, Asia, Oceania)
  - 4 aircraft
  - 6 countries with coarse border outlines (a handful of vertices each,
    good enough to exercise border avoidance; not survey-grade data)
"""

import asyncio

from sqlalchemy import select

from src.domain.enums import AircraftType, Manufacturer
from src.infrastructure.database import async_session_factory, create_tables, engine
from src.infrastructure.models import (
    AircraftModel,
    AirportModel,
    CountryBordersModel,
    CountryModel,
)


AIRPORTS = [
    {"iata": "JFK", "name": "John F. Kennedy International Airport", "city": "New York", "country": "USA", "continent": "North America", "latitude": 40.6413, "longitude": -73.7781},
    {"iata": "LAX", "name": "Los Angeles International Airport", "city": "Los Angeles", "country": "USA", "continent": "North America", "latitude": 33.9416, "longitude": -118.4085},
    {"iata": "CDG", "name": "Charles de Gaulle Airport", "city": "Paris", "country": "France", "continent": "Europe", "latitude": 49.0097, "longitude": 2.5479},
    {"iata": "FRA", "name": "Frankfurt Airport", "city": "Frankfurt", "country": "Germany", "continent": "Europe", "latitude": 50.0333, "longitude": 8.5706},
    {"iata": "MXP", "name": "Milan Malpensa Airport", "city": "Milan", "country": "Italy", "continent": "Europe", "latitude": 45.6306, "longitude": 8.7281},
    {"iata": "VIE", "name": "Vienna International Airport", "city": "Vienna", "country": "Austria", "continent": "Europe", "latitude": 48.1103, "longitude": 16.5697},
    {"iata": "NAN", "name": "Nadi International Airport", "city": "Nadi", "country": "Fiji", "continent": "Oceania", "latitude": -17.7554, "longitude": 177.4431},
    {"iata": "AKL", "name": "Auckland Airport", "city": "Auckland", "country": "New Zealand", "continent": "Oceania", "latitude": -37.0082, "longitude": 174.7850},
]

AIRCRAFT = [
    {"type": AircraftType.COMMERCIAL, "name": "Boeing 737", "manufacturer": Manufacturer.BOEING, "range": 3510},
    {"type": AircraftType.HEAVY, "name": "Gulfstream G650", "manufacturer": Manufacturer.GULFSTREAM, "range": 7500},
    {"type": AircraftType.CARGO, "name": "Antonov An-225", "manufacturer": Manufacturer.ANTONOV, "range": 9700},
    {"type": AircraftType.COMMERCIAL, "name": "Airbus A320", "manufacturer": Manufacturer.AIRBUS, "range": 3200},
]

# (lat, lng) outlines, deliberately coarse
COUNTRIES = [
    {"code": "CHE", "name": "Switzerland", "continent": "Europe", "rings": [[
        (47.8, 5.9), (47.8, 10.5), (46.4, 10.5), (45.8, 9.0), (46.1, 6.0),
    ]]},
    {"code": "AUT", "name": "Austria", "continent": "Europe", "rings": [[
        (48.8, 13.8), (49.0, 15.0), (48.6, 17.1), (47.0, 16.3), (46.4, 13.7), (47.1, 9.5), (47.6, 9.6),
    ]]},
    {"code": "DEU", "name": "Germany", "continent": "Europe", "rings": [[
        (54.9, 8.6), (54.4, 14.2), (51.0, 15.0), (50.3, 12.1), (47.5, 13.0), (47.6, 7.6), (49.0, 6.2), (51.0, 5.9), (53.5, 7.0),
    ]]},
    {"code": "FRA", "name": "France", "continent": "Europe", "rings": [[
        (51.1, 2.5), (49.0, 8.2), (47.5, 7.5), (46.2, 6.1), (43.7, 7.5), (42.4, 3.1), (43.4, -1.8), (46.2, -1.2), (48.6, -4.8), (49.7, -1.6),
    ], [
        (43.0, 9.6), (41.4, 9.3), (41.9, 8.6),
    ]]},
    {"code": "FJI", "name": "Fiji", "continent": "Oceania", "rings": [[
        (-16.0, 177.0), (-16.0, -179.5), (-19.2, -179.5), (-19.2, 177.0),
    ]]},
    {"code": "USA", "name": "United States", "continent": "North America", "rings": [[
        (49.0, -123.0), (49.0, -95.2), (45.0, -71.5), (41.3, -69.9), (35.2, -75.5), (25.1, -80.4), (29.7, -93.8), (25.9, -97.1), (31.3, -111.0), (32.5, -117.1), (40.4, -124.4),
    ]]},
]


def borders_geojson(rings: list[list[tuple[float, float]]]) -> dict:
    """Wrap (lat, lng) rings as a GeoJSON FeatureCollection ([lng, lat])."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [
                        [[lng, lat] for lat, lng in ring + [ring[0]]],
                    ],
                },
            }
            for ring in rings
        ],
    }


async def seed():
    await create_tables()

    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(select(AirportModel.iata).limit(1))
        if result.first() is not None:
            print("Database already seeded. Skipping.")
            return

        # ── Airports ──────────────────────────────────────────────────
        session.add_all(AirportModel(**a) for a in AIRPORTS)
        await session.flush()
        print(f"  Created {len(AIRPORTS)} airports")

        # ── Aircraft ──────────────────────────────────────────────────
        session.add_all(AircraftModel(**a) for a in AIRCRAFT)
        await session.flush()
        print(f"  Created {len(AIRCRAFT)} aircraft")

        # ── Countries & borders ───────────────────────────────────────
        for c in COUNTRIES:
            session.add(
                CountryModel(code=c["code"], name=c["name"], continent=c["continent"])
            )
        await session.flush()
        for c in COUNTRIES:
            session.add(
                CountryBordersModel(code=c["code"], borders=borders_geojson(c["rings"]))
            )
        await session.flush()
        print(f"  Created {len(COUNTRIES)} countries with borders")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
