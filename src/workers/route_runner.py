"""
Route Computation Worker Pool
=============================

``compute_route`` is CPU-bound (the visibility graph is quadratic in border
vertices), so it runs in a thread pool instead of on the event loop.

Timeout / cancellation
----------------------
* Each call gets its own ``threading.Event``.
* The caller waits up to ``ROUTE_TIMEOUT_SECONDS`` (default 10 s).
* On timeout the event is set; the planner polls it and aborts with
  ``RouteCancelledError``, freeing the worker thread.

No retries: a blocked route is deterministic and fails the same way again.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping, Sequence

from src.config import settings
from src.domain.entities import Coordinate, RouteResult
from src.domain.polygons import Polygon
from src.domain.routing import compute_route

logger = logging.getLogger(__name__)

_executor: ThreadPoolExecutor | None = None


class RouteTimeoutError(Exception):
    """Route computation exceeded ``settings.route_timeout_seconds``."""


# ── Public API ────────────────────────────────────────────────────────


async def start_route_pool() -> None:
    global _executor
    _executor = ThreadPoolExecutor(
        max_workers=settings.route_workers, thread_name_prefix="route"
    )
    logger.info("Route worker pool started (workers=%d)", settings.route_workers)


async def stop_route_pool() -> None:
    global _executor
    if _executor:
        _executor.shutdown(wait=False, cancel_futures=True)
        _executor = None
    logger.info("Route worker pool stopped")


async def run_route(
    origin: Coordinate,
    destination: Coordinate,
    forbidden_codes: Iterable[str],
    polygon_lookup: Mapping[str, Sequence[Polygon]],
    timeout: float | None = None,
) -> RouteResult:
    """
    Run ``compute_route`` on the pool (or the loop's default executor when
    the pool is not started) and wait at most *timeout* seconds.
    """
    timeout = settings.route_timeout_seconds if timeout is None else timeout
    cancel_event = threading.Event()
    call = functools.partial(
        compute_route,
        origin,
        destination,
        list(forbidden_codes),
        polygon_lookup,
        step_km=settings.route_sample_step_km,
        cancel_event=cancel_event,
    )

    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(_executor, call)
    try:
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        cancel_event.set()
        logger.warning("Route computation timed out after %.1fs", timeout)
        raise RouteTimeoutError(
            f"Route computation exceeded {timeout:.1f} seconds"
        ) from None
