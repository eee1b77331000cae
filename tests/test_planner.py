"""Unit tests for the visibility-graph route planner."""

import threading

import pytest

from src.domain.entities import Coordinate, RouteBlockedError, RouteCancelledError
from src.domain.geodesy import path_length_km
from src.domain.planner import build_edges, build_nodes, plan_path
from src.domain.polygons import intersects_segment, merge_antimeridian_parts
from tests.conftest import ring

WEST = Coordinate(0, -20)
EAST = Coordinate(0, 20)


def c_shape():
    """
    Square annulus (outer +/-10, inner +/-6 degrees) with a gap on the east
    side between lat -2 and 2.
    """
    return ring(
        (2, 10), (10, 10), (10, -10), (-10, -10), (-10, 10), (-2, 10),
        (-2, 6), (-6, 6), (-6, -6), (6, -6), (6, 6), (2, 6),
    )


def gap_plug():
    """Rectangle closing the C's gap; its corners sit inside the C's arms."""
    return ring((-4, 7), (-4, 9), (4, 9), (4, 7))


class TestFastPath:
    def test_no_polygons_is_direct(self):
        assert plan_path(WEST, EAST, []) == [WEST, EAST]

    def test_polygon_off_route_gives_no_detour(self):
        far_away = ring((30, -5), (30, 5), (40, 5), (40, -5))
        assert plan_path(WEST, EAST, [far_away]) == [WEST, EAST]

    def test_identical_endpoints_outside_polygon(self, square):
        p = Coordinate(20, 20)
        assert plan_path(p, p, [square]) == [p, p]


class TestDetour:
    def test_goes_around_square(self, square):
        path = plan_path(WEST, EAST, [square])
        assert path == [WEST, Coordinate(-5, -5), Coordinate(-5, 5), EAST]

    def test_equal_length_tie_prefers_smallest_waypoints(self, square):
        """North and south detours are mirror images; south sorts first."""
        path = plan_path(WEST, EAST, [square])
        assert path[1] < Coordinate(5, -5)

    def test_repeatable(self, square):
        assert plan_path(WEST, EAST, [square]) == plan_path(WEST, EAST, [square])

    def test_detour_longer_than_direct(self, square):
        path = plan_path(WEST, EAST, [square])
        assert path_length_km(path) > path_length_km([WEST, EAST])

    def test_detour_across_antimeridian(self, fiji):
        origin, destination = Coordinate(-17.5, 170), Coordinate(-17.5, -170)
        path = plan_path(origin, destination, [fiji])
        assert path[0] == origin and path[-1] == destination
        assert len(path) > 2
        assert set(path[1:-1]) <= set(fiji.vertices)

    def test_country_cut_at_antimeridian_is_not_crossed_along_the_cut(self):
        east = ring((-10, 170), (-10, 180), (10, 180), (10, 170))
        west = ring((-10, -180), (-10, -170), (10, -170), (10, -180))
        origin, destination = Coordinate(-15, -180), Coordinate(15, -180)

        path = plan_path(origin, destination, merge_antimeridian_parts([east, west]))

        assert path[0] == origin and path[-1] == destination
        for a, b in zip(path, path[1:]):
            assert not (abs(a.lng) == 180 and abs(b.lng) == 180)
        assert path_length_km(path) > path_length_km([origin, destination]) + 1000

    def test_path_hops_clear_other_polygons(self, square):
        blocker = ring((8, -1), (8, 1), (12, 1), (12, -1))
        origin, destination = Coordinate(10, -20), Coordinate(-10, 20)
        path = plan_path(origin, destination, [square, blocker])
        for a, b in zip(path, path[1:]):
            assert not intersects_segment(blocker, a, b)


class TestBlocked:
    def test_destination_inside_polygon(self, square):
        with pytest.raises(RouteBlockedError, match="Destination"):
            plan_path(WEST, Coordinate(1, 1), [square])

    def test_origin_inside_polygon(self, square):
        with pytest.raises(RouteBlockedError, match="Origin"):
            plan_path(Coordinate(0, 0), EAST, [square])

    def test_enclosed_destination_without_containment(self):
        """Destination sits in the C's hole, sealed off by the plug."""
        with pytest.raises(RouteBlockedError):
            plan_path(Coordinate(0, 30), Coordinate(0, 0), [c_shape(), gap_plug()])

    def test_open_gap_is_routable(self):
        path = plan_path(Coordinate(0, 30), Coordinate(0, 0), [c_shape()])
        assert path == [Coordinate(0, 30), Coordinate(0, 0)]


class TestGraph:
    def test_buried_vertices_are_dropped(self):
        nodes = build_nodes(Coordinate(0, 30), Coordinate(0, 0), [c_shape(), gap_plug()])
        for corner in gap_plug().vertices:
            assert corner not in nodes

    def test_shared_vertices_appear_once(self, square):
        neighbour = ring((-5, 5), (-5, 15), (5, 15), (5, 5))
        nodes = build_nodes(WEST, EAST, [square, neighbour])
        assert len(nodes) == len(set(nodes)) == 2 + 6

    def test_ring_neighbours_are_connected(self, square):
        nodes = build_nodes(WEST, EAST, [square])
        adjacency = build_edges(nodes, [square])
        i, j = nodes.index(Coordinate(-5, -5)), nodes.index(Coordinate(-5, 5))
        assert j in {v for v, _ in adjacency[i]}

    def test_diagonal_is_not_connected(self, square):
        nodes = build_nodes(WEST, EAST, [square])
        adjacency = build_edges(nodes, [square])
        i, j = nodes.index(Coordinate(-5, -5)), nodes.index(Coordinate(5, 5))
        assert j not in {v for v, _ in adjacency[i]}


class TestCancellation:
    def test_set_event_aborts_planner(self, square):
        event = threading.Event()
        event.set()
        with pytest.raises(RouteCancelledError):
            plan_path(WEST, EAST, [square], cancel_event=event)

    def test_unset_event_is_ignored(self, square):
        path = plan_path(WEST, EAST, [square], cancel_event=threading.Event())
        assert len(path) == 4
