"""
Country endpoints
=================

GET /api/v1/countries        -- list countries, optionally by continent
GET /api/v1/countries/{code} -- border GeoJSON of one country
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_countries
from src.api.middleware import limiter
from src.api.schemas import CountryBordersResponse, CountryResponse
from src.config import settings
from src.infrastructure.repositories import CountryNotFoundError, CountryRepository

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[CountryResponse], summary="List countries")
@limiter.limit(settings.rate_limit)
async def list_countries(
    request: Request,
    continent: Optional[str] = None,
    countries: CountryRepository = Depends(get_countries),
):
    try:
        return await countries.list(continent=continent)
    except CountryNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get(
    "/{code}",
    response_model=CountryBordersResponse,
    summary="Get a country's border geometry",
)
@limiter.limit(settings.rate_limit)
async def get_country(
    request: Request,
    code: str,
    countries: CountryRepository = Depends(get_countries),
):
    try:
        return await countries.get_borders(code)
    except CountryNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
