"""
Unit Tests for Distance Utilities (src/spatial/geo.py)
"""

import math

import numpy as np
import pytest

from src.spatial.geo import (
    EARTH_RADIUS_M,
    Coordinate,
    haversine_m,
    haversine_to_many_m,
)


class TestHaversine:
    """Test scalar great-circle distance."""

    def test_zero_for_identical_points(self):
        """Test that a point is at distance zero from itself."""
        p = Coordinate(40.7454, -73.9884)
        assert haversine_m(p, p) == 0.0

    def test_positive_for_distinct_points(self):
        """Test that distinct points have positive distance."""
        assert haversine_m(Coordinate(40.7454, -73.9884), Coordinate(40.7454, -73.98840001)) > 0

    def test_symmetric(self):
        """Test distance(a, b) == distance(b, a)."""
        a = Coordinate(40.7454, -73.9884)
        b = Coordinate(40.7039, -73.9867)
        assert haversine_m(a, b) == pytest.approx(haversine_m(b, a), rel=1e-12)

    def test_one_degree_latitude(self):
        """Test that one degree along a meridian is R * pi / 180."""
        d = haversine_m(Coordinate(40.0, -74.0), Coordinate(41.0, -74.0))
        assert d == pytest.approx(EARTH_RADIUS_M * math.pi / 180, rel=1e-9)

    def test_city_scale_distance(self):
        """Test two Flatiron points 0.001 degrees of longitude apart (~84m)."""
        d = haversine_m(Coordinate(40.745, -73.987), Coordinate(40.745, -73.988))
        assert 80 < d < 90

    def test_antipodal_points(self):
        """Test that antipodes are half the circumference apart."""
        d = haversine_m(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
        assert d == pytest.approx(EARTH_RADIUS_M * math.pi, rel=1e-9)


class TestHaversineVectorised:
    """Test the numpy variant against the scalar one."""

    def test_matches_scalar(self):
        """Test element-wise agreement with haversine_m."""
        origin = Coordinate(40.7297, -73.9989)
        lats = [40.7454, 40.7422, 40.7039, 40.7733]
        lngs = [-73.9884, -74.0059, -73.9867, -73.9154]

        distances = haversine_to_many_m(origin, lats, lngs)

        assert isinstance(distances, np.ndarray)
        assert distances.shape == (4,)
        for d, lat, lng in zip(distances, lats, lngs):
            assert d == pytest.approx(haversine_m(origin, Coordinate(lat, lng)), rel=1e-9)

    def test_zero_for_coincident_points(self):
        """Test exact zero when the target equals the origin."""
        origin = Coordinate(40.745, -73.987)
        distances = haversine_to_many_m(origin, [40.745], [-73.987])
        assert distances[0] == 0.0

    def test_empty_targets(self):
        """Test that no targets give an empty array."""
        assert haversine_to_many_m(Coordinate(0.0, 0.0), [], []).shape == (0,)
