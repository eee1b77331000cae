"""
FastAPI application factory.

* Registers the distance, lookup and health routes under ``/api/v1``.
* Starts / stops the route worker pool via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import aircraft, airports, countries, distance, health
from src.workers import route_runner as _route_runner

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the route worker pool on startup; stop it on shutdown."""
    await _route_runner.start_route_pool()
    yield
    await _route_runner.stop_route_pool()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Terraroute API",
        description=(
            "Great-circle flight distances between airports, with optional "
            "routing around the territory of selected countries."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    for module in (distance, airports, aircraft, countries, health):
        app.include_router(module.router, prefix="/api/v1")

    return app
