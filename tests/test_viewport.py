"""
Unit Tests for Viewport Fitting (src/spatial/viewport.py)
"""

import pytest

from src.spatial.geo import Coordinate
from src.spatial.viewport import (
    MIN_SPAN_DEG,
    BoundingRegion,
    ViewportFitter,
    fit_region,
    zoom_in,
    zoom_out,
)


class TestFitRegion:
    """Test zoom-to-fit regions."""

    def test_padding(self):
        """Test 50% padding on a 0.02 x 0.02 degree box."""
        region = fit_region([Coordinate(40.70, -74.00), Coordinate(40.72, -74.02)])

        assert region.center.lat == pytest.approx(40.71)
        assert region.center.lng == pytest.approx(-74.01)
        assert region.lat_span == pytest.approx(0.03)
        assert region.lng_span == pytest.approx(0.03)

    def test_single_coordinate_gets_floor(self):
        """Test that a single point is centered with the minimum span."""
        region = fit_region([Coordinate(40.70, -74.00)])

        assert region.center == Coordinate(40.70, -74.00)
        assert region.lat_span == MIN_SPAN_DEG == 0.005
        assert region.lng_span == MIN_SPAN_DEG

    def test_floor_applies_per_axis(self):
        """Test a north-south line: only the longitude span is floored."""
        region = fit_region([Coordinate(40.70, -74.00), Coordinate(40.74, -74.00)])

        assert region.lat_span == pytest.approx(0.06)
        assert region.lng_span == MIN_SPAN_DEG

    def test_center_is_bbox_midpoint_not_mean(self):
        """Test that clumped points do not pull the center."""
        coords = [
            Coordinate(40.70, -74.00),
            Coordinate(40.70, -74.00),
            Coordinate(40.70, -74.00),
            Coordinate(40.80, -73.90),
        ]
        region = fit_region(coords)

        assert region.center.lat == pytest.approx(40.75)
        assert region.center.lng == pytest.approx(-73.95)

    def test_contains_all_inputs(self):
        """Test that the fitted region covers every coordinate."""
        coords = [
            Coordinate(40.7454, -73.9884),
            Coordinate(40.7422, -74.0059),
            Coordinate(40.7297, -73.9989),
        ]
        region = fit_region(coords)
        assert all(region.contains(c) for c in coords)

    def test_empty_input_fails_fast(self):
        with pytest.raises(ValueError):
            fit_region([])

    def test_accepts_generator(self):
        """Test that a one-shot iterable is fitted like the equivalent list."""
        coords = [Coordinate(40.70, -74.00), Coordinate(40.72, -74.02)]

        region = fit_region(c for c in coords)

        assert region == fit_region(coords)

    def test_empty_generator_fails_fast(self):
        with pytest.raises(ValueError, match="zero coordinates"):
            fit_region(c for c in [])

    @pytest.mark.parametrize("kwargs", [
        {"padding_ratio": -0.1},
        {"min_span_deg": 0.0},
        {"min_span_deg": -0.005},
    ])
    def test_rejects_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            ViewportFitter(**kwargs)

    def test_zero_padding_allowed(self):
        fitter = ViewportFitter(padding_ratio=0.0)

        region = fitter.fit([Coordinate(40.70, -74.00), Coordinate(40.72, -74.02)])

        assert region.lat_span == pytest.approx(0.02)

    def test_custom_fitter(self):
        """Test custom padding and floor."""
        fitter = ViewportFitter(padding_ratio=1.0, min_span_deg=0.05)

        region = fitter.fit([Coordinate(40.70, -74.00), Coordinate(40.72, -74.02)])

        assert region.lat_span == pytest.approx(0.05)
        assert region.lng_span == pytest.approx(0.05)

        wide = fitter.fit([Coordinate(40.60, -74.00), Coordinate(40.70, -74.00)])
        assert wide.lat_span == pytest.approx(0.2)


class TestRegionZoom:
    """Test zooming a region around its center."""

    @pytest.fixture
    def region(self):
        return BoundingRegion(Coordinate(40.7128, -74.0060), 0.1, 0.1)

    def test_zoom_in_halves_spans(self, region):
        zoomed = zoom_in(region)

        assert zoomed.center == region.center
        assert zoomed.lat_span == pytest.approx(0.05)
        assert zoomed.zoom_level == pytest.approx(region.zoom_level + 1)

    def test_zoom_out_doubles_spans(self, region):
        zoomed = zoom_out(region)

        assert zoomed.lng_span == pytest.approx(0.2)
        assert zoomed.zoom_level == pytest.approx(region.zoom_level - 1)

    def test_rejects_non_positive_factor(self, region):
        with pytest.raises(ValueError):
            region.zoomed(0)
