"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.domain.enums import AircraftType, Manufacturer


# ── Requests ──────────────────────────────────────────────────────────


class DistanceRequest(BaseModel):
    departure: str = Field(..., min_length=3, max_length=3, description="IATA code")
    destination: str = Field(..., min_length=3, max_length=3, description="IATA code")
    borders: list[str] = Field(
        default_factory=list,
        description="Country codes whose territory the route must avoid.",
    )

    @field_validator("departure", "destination")
    @classmethod
    def _upper_iata(cls, v: str) -> str:
        return v.strip().upper()


# ── Responses ─────────────────────────────────────────────────────────


class CoordinateSchema(BaseModel):
    lat: float
    lng: float


class DistancesSchema(BaseModel):
    km: float
    miles: float
    nm: float


class DistanceResponse(BaseModel):
    route: DistanceRequest
    distances: DistancesSchema
    path: list[CoordinateSchema]
    midpoint: CoordinateSchema


class AirportResponse(BaseModel):
    iata: str
    name: str
    city: str
    country: str
    continent: str
    latitude: float
    longitude: float

    model_config = {"from_attributes": True}


class AircraftResponse(BaseModel):
    id: int
    type: AircraftType
    name: str
    manufacturer: Manufacturer
    range: int

    model_config = {"from_attributes": True}


class CountryResponse(BaseModel):
    code: str
    name: str
    continent: str

    model_config = {"from_attributes": True}


class CountryBordersResponse(BaseModel):
    code: str
    borders: dict[str, Any]

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
