"""
Visibility-Graph Route Planner
==============================

Finds the shortest great-circle route from an origin to a destination that
never enters the interior of a forbidden polygon.

1. **Fast path**     -- no polygons, or the direct segment is clear: the
   route is ``[origin, destination]``.
2. **Nodes**         -- origin, destination and every distinct border
   vertex that is not buried inside another forbidden polygon.
3. **Edges**         -- two nodes are connected when the great-circle hop
   between them does not intersect any forbidden polygon.  Consecutive
   vertices of one ring are always connected as far as that ring is
   concerned; the hop is still checked against the other polygons.
4. **Search**        -- Dijkstra over hop lengths in km.

Tie-break
---------
Queue entries are ordered by ``(km, border vertices used, waypoints)``:
among equally long routes the one with fewer border vertices wins, then
the lexicographically smallest ``(lat, lng)`` waypoint sequence.  The
result is therefore identical across runs.

Complexity
----------
Let V = border vertices, E = ring edges, S = samples per hop.

* Edge build:    O(V^2 x S x E)  -- dominates; polled for cancellation
* Search:        O(V^2 log V)
"""

from __future__ import annotations

import heapq
import logging
import threading
from typing import Optional, Sequence

from .entities import Coordinate, RouteBlockedError, RouteCancelledError
from .geodesy import haversine_km
from .polygons import Polygon, contains_point, intersects_segment

logger = logging.getLogger(__name__)

ORIGIN, DESTINATION = 0, 1


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RouteCancelledError("Route computation cancelled")


def segment_is_clear(
    a: Coordinate,
    b: Coordinate,
    polygons: Sequence[Polygon],
    step_km: float = 50.0,
) -> bool:
    """True when the great-circle hop a -> b stays outside every polygon."""
    return not any(intersects_segment(poly, a, b, step_km) for poly in polygons)


def build_nodes(
    origin: Coordinate,
    destination: Coordinate,
    polygons: Sequence[Polygon],
) -> list[Coordinate]:
    """
    Origin, destination, then border vertices in ring order.

    Vertices shared by several rings appear once.  A vertex strictly
    inside another ring is unreachable and is left out, unless it is also
    a vertex of that ring (shared border).
    """
    nodes = [origin, destination]
    seen = {origin, destination}
    vertex_sets = [set(poly.vertices) for poly in polygons]

    for i, poly in enumerate(polygons):
        for v in poly.vertices:
            if v in seen:
                continue
            buried = any(
                j != i and v not in vertex_sets[j] and contains_point(other, v)
                for j, other in enumerate(polygons)
            )
            if buried:
                continue
            seen.add(v)
            nodes.append(v)
    return nodes


def build_edges(
    nodes: Sequence[Coordinate],
    polygons: Sequence[Polygon],
    step_km: float = 50.0,
    cancel_event: Optional[threading.Event] = None,
) -> list[list[tuple[int, float]]]:
    """Adjacency lists ``[(neighbour, km), ...]`` of the visibility graph."""
    index = {node: i for i, node in enumerate(nodes)}
    # (i, j) -> indices of the polygons whose ring has i-j as an edge
    ring_owners: dict[tuple[int, int], set[int]] = {}
    for k, poly in enumerate(polygons):
        for a, b in poly.adjacent_pairs():
            if a in index and b in index:
                i, j = sorted((index[a], index[b]))
                ring_owners.setdefault((i, j), set()).add(k)

    adjacency: list[list[tuple[int, float]]] = [[] for _ in nodes]
    for i in range(len(nodes)):
        _check_cancelled(cancel_event)
        for j in range(i + 1, len(nodes)):
            owners = ring_owners.get((i, j), set())
            obstacles = [p for k, p in enumerate(polygons) if k not in owners]
            if not segment_is_clear(nodes[i], nodes[j], obstacles, step_km):
                continue
            w = haversine_km(nodes[i], nodes[j])
            adjacency[i].append((j, w))
            adjacency[j].append((i, w))
    return adjacency


def shortest_path(
    nodes: Sequence[Coordinate],
    adjacency: Sequence[Sequence[tuple[int, float]]],
    cancel_event: Optional[threading.Event] = None,
) -> list[Coordinate]:
    """Dijkstra from ``ORIGIN`` to ``DESTINATION`` with the tie-break above."""
    start = (0.0, 0, (nodes[ORIGIN],))
    best = {ORIGIN: start}
    heap = [(*start, ORIGIN)]
    settled: set[int] = set()

    while heap:
        _check_cancelled(cancel_event)
        dist, used, path, u = heapq.heappop(heap)
        if u in settled:
            continue
        settled.add(u)
        if u == DESTINATION:
            return list(path)

        for v, w in adjacency[u]:
            if v in settled:
                continue
            key = (dist + w, used + (v != DESTINATION), path + (nodes[v],))
            if v not in best or key < best[v]:
                best[v] = key
                heapq.heappush(heap, (*key, v))

    raise RouteBlockedError("No route avoiding the specified borders exists")


def plan_path(
    origin: Coordinate,
    destination: Coordinate,
    polygons: Sequence[Polygon],
    *,
    step_km: float = 50.0,
    cancel_event: Optional[threading.Event] = None,
) -> list[Coordinate]:
    """
    Shortest waypoint path from *origin* to *destination* avoiding *polygons*.

    Raises ``RouteBlockedError`` when an endpoint lies inside a forbidden
    polygon or the two are disconnected, and ``RouteCancelledError`` when
    *cancel_event* is set while the graph is built or searched.
    """
    if not polygons:
        return [origin, destination]

    for poly in polygons:
        if contains_point(poly, origin):
            raise RouteBlockedError("Origin lies inside a forbidden border")
        if contains_point(poly, destination):
            raise RouteBlockedError("Destination lies inside a forbidden border")

    if origin == destination or segment_is_clear(
        origin, destination, polygons, step_km
    ):
        return [origin, destination]

    nodes = build_nodes(origin, destination, polygons)
    adjacency = build_edges(nodes, polygons, step_km, cancel_event)
    logger.debug(
        "Visibility graph: %d nodes, %d edges",
        len(nodes),
        sum(len(n) for n in adjacency) // 2,
    )

    path = shortest_path(nodes, adjacency, cancel_event)
    logger.info("Detour planned via %d border vertices", len(path) - 2)
    return path
