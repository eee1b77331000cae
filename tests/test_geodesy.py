"""Unit tests for the great-circle geodesy primitives."""

import itertools
import math

import pytest

from src.domain.entities import Coordinate
from src.domain.geodesy import (
    EARTH_RADIUS_KM,
    central_angle,
    haversine_km,
    interpolate,
    path_length_km,
    sample_great_circle,
    spherical_centroid,
)

JFK = Coordinate(40.6413, -73.7781)
LAX = Coordinate(33.9416, -118.4085)
CDG = Coordinate(49.0097, 2.5479)
NAN_FJ = Coordinate(-17.7554, 177.4431)

POINTS = [JFK, LAX, CDG, NAN_FJ, Coordinate(0, 0), Coordinate(89.9, 10), Coordinate(-60, -179.5)]


class TestHaversine:
    @pytest.mark.parametrize("p", POINTS)
    def test_same_point_is_zero(self, p):
        assert haversine_km(p, p) == 0.0

    def test_known_distance(self):
        assert haversine_km(JFK, LAX) == pytest.approx(3974, abs=5)

    def test_symmetric(self):
        for a, b in itertools.combinations(POINTS, 2):
            assert haversine_km(a, b) == haversine_km(b, a)

    def test_triangle_inequality(self):
        for a, b, c in itertools.permutations(POINTS, 3):
            assert haversine_km(a, c) <= haversine_km(a, b) + haversine_km(b, c) + 1e-6

    def test_antipodes_are_half_circumference(self):
        d = haversine_km(Coordinate(0, 0), Coordinate(0, 180))
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_crossing_antimeridian_is_short(self):
        d = haversine_km(Coordinate(0, 179.5), Coordinate(0, -179.5))
        assert d == pytest.approx(111.19, abs=0.1)

    def test_central_angle_in_radians(self):
        assert central_angle(Coordinate(0, 0), Coordinate(0, 90)) == pytest.approx(math.pi / 2)


class TestPathLength:
    def test_empty_and_single_point(self):
        assert path_length_km([]) == 0.0
        assert path_length_km([JFK]) == 0.0

    def test_two_points_equal_haversine(self):
        assert path_length_km([JFK, LAX]) == haversine_km(JFK, LAX)

    def test_multi_hop_sums_segments(self):
        expected = haversine_km(JFK, CDG) + haversine_km(CDG, LAX)
        assert path_length_km([JFK, CDG, LAX]) == pytest.approx(expected)
        assert path_length_km([JFK, CDG, LAX]) > haversine_km(JFK, LAX)


class TestSphericalCentroid:
    def test_empty_is_zero_coordinate(self):
        assert spherical_centroid([]) == Coordinate(0.0, 0.0)

    def test_single_point_is_itself(self):
        c = spherical_centroid([CDG])
        assert c.lat == pytest.approx(CDG.lat)
        assert c.lng == pytest.approx(CDG.lng)

    def test_jfk_lax_midpoint(self):
        c = spherical_centroid([JFK, LAX])
        assert c.lat == pytest.approx(39.46, abs=0.05)
        assert c.lng == pytest.approx(-97.14, abs=0.05)

    def test_antimeridian_midpoint_is_not_naive_mean(self):
        """A naive lng mean of 170 and -170 would give 0."""
        c = spherical_centroid([Coordinate(0, 170), Coordinate(0, -170)])
        assert abs(c.lng) == pytest.approx(180, abs=1e-9)
        assert c.lat == pytest.approx(0, abs=1e-9)


class TestSampling:
    def test_interpolate_endpoints_and_middle(self):
        a, b = Coordinate(0, 0), Coordinate(0, 90)
        mid = interpolate(a, b, 0.5)
        assert mid.lat == pytest.approx(0, abs=1e-9)
        assert mid.lng == pytest.approx(45)

    def test_samples_respect_step(self):
        samples = sample_great_circle(JFK, LAX, step_km=100)
        assert samples[0] == JFK and samples[-1] == LAX
        assert len(samples) == math.ceil(haversine_km(JFK, LAX) / 100) + 1
        for a, b in zip(samples, samples[1:]):
            assert haversine_km(a, b) <= 100 + 1e-6

    def test_short_hop_has_no_interior_samples(self):
        a, b = Coordinate(0, 0), Coordinate(0, 0.1)
        assert sample_great_circle(a, b, step_km=50) == [a, b]

    def test_antipodal_samples_are_continuous(self):
        a, b = Coordinate(10, 20), Coordinate(-10, -160)
        samples = sample_great_circle(a, b, step_km=500)
        assert samples[0] == a and samples[-1] == b
        for p, q in zip(samples, samples[1:]):
            assert haversine_km(p, q) <= 500 + 1e-6

    def test_rejects_non_positive_step(self):
        with pytest.raises(ValueError):
            sample_great_circle(JFK, LAX, step_km=0)
