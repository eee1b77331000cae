"""
Airport endpoints
=================

GET /api/v1/airports -- list airports, filtered by iata / continent / country
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_airports
from src.api.middleware import limiter
from src.api.schemas import AirportResponse
from src.config import settings
from src.infrastructure.repositories import AirportRepository

router = APIRouter(prefix="/airports", tags=["airports"])


@router.get("", response_model=list[AirportResponse], summary="List airports")
@limiter.limit(settings.rate_limit)
async def list_airports(
    request: Request,
    iata: Optional[str] = None,
    continent: Optional[str] = None,
    country: Optional[str] = None,
    airports: AirportRepository = Depends(get_airports),
):
    return await airports.list(
        iata=iata, continent=continent, country=country
    )
