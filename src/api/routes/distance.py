"""
Distance endpoint
=================

POST /api/v1/distance -- great-circle distance, path and midpoint between
                         two airports, optionally avoiding country borders
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_airports, get_borders
from src.api.middleware import limiter
from src.api.schemas import DistanceRequest, DistanceResponse, ErrorResponse
from src.config import settings
from src.domain.entities import (
    InvalidInputError,
    RouteBlockedError,
    RouteCancelledError,
)
from src.infrastructure.geojson import InvalidGeoJSON
from src.infrastructure.repositories import (
    AirportNotFoundError,
    AirportRepository,
    BorderRepository,
)
from src.workers.route_runner import RouteTimeoutError, run_route

logger = logging.getLogger(__name__)

router = APIRouter(tags=["distance"])


@router.post(
    "/distance",
    response_model=DistanceResponse,
    summary="Calculate the flight distance between two airports",
    responses={
        404: {"model": ErrorResponse, "description": "Airport not found."},
        422: {"model": ErrorResponse, "description": "Invalid input or route blocked."},
        504: {"model": ErrorResponse, "description": "Route computation timed out."},
    },
)
@limiter.limit(settings.rate_limit)
async def calculate_distance(
    request: Request,
    body: DistanceRequest,
    airports: AirportRepository = Depends(get_airports),
    borders: BorderRepository = Depends(get_borders),
):
    try:
        origin = await airports.get_coordinate(body.departure, role="departure")
        destination = await airports.get_coordinate(
            body.destination, role="destination"
        )
        polygons = await borders.polygons_for(body.borders)
        result = await run_route(origin, destination, body.borders, polygons)
    except AirportNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except RouteBlockedError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except (InvalidInputError, InvalidGeoJSON) as exc:
        logger.error(
            "Invalid geometry for %s -> %s: %s", body.departure, body.destination, exc
        )
        raise HTTPException(status_code=422, detail=str(exc))
    except (RouteTimeoutError, RouteCancelledError) as exc:
        raise HTTPException(status_code=504, detail=str(exc))

    return DistanceResponse(route=body, **result.to_dict())
