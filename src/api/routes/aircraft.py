"""
Aircraft endpoints
==================

GET /api/v1/aircraft -- list aircraft, filtered by manufacturer / type
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import get_aircraft
from src.api.middleware import limiter
from src.api.schemas import AircraftResponse
from src.config import settings
from src.domain.enums import AircraftType, Manufacturer
from src.infrastructure.repositories import AircraftRepository

router = APIRouter(prefix="/aircraft", tags=["aircraft"])


@router.get("", response_model=list[AircraftResponse], summary="List aircraft")
@limiter.limit(settings.rate_limit)
async def list_aircraft(
    request: Request,
    manufacturer: Optional[Manufacturer] = None,
    aircraft_type: Optional[AircraftType] = Query(None, alias="type"),
    aircraft: AircraftRepository = Depends(get_aircraft),
):
    return await aircraft.list(
        manufacturer=manufacturer.value if manufacturer else None,
        aircraft_type=aircraft_type.value if aircraft_type else None,
    )
