"""Viewport fitting: bounding regions for "zoom to fit"."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .geo import Coordinate
from .zoom_policy import zoom_from_span


DEFAULT_PADDING_RATIO = 0.5
MIN_SPAN_DEG = 0.005  # ~500 m


@dataclass(frozen=True)
class BoundingRegion:
    """A viewport: center plus latitudinal/longitudinal span in degrees."""

    center: Coordinate
    lat_span: float
    lng_span: float

    @property
    def zoom_level(self) -> float:
        return zoom_from_span(self.lat_span)

    def contains(self, coord: Coordinate) -> bool:
        return (
            abs(coord.lat - self.center.lat) <= self.lat_span / 2
            and abs(coord.lng - self.center.lng) <= self.lng_span / 2
        )

    def zoomed(self, factor: float) -> "BoundingRegion":
        """Scale both spans by ``factor`` around the same center."""
        if not factor > 0:
            raise ValueError(f"Zoom factor must be positive, got {factor!r}")
        return BoundingRegion(self.center, self.lat_span * factor, self.lng_span * factor)


def zoom_in(region: BoundingRegion) -> BoundingRegion:
    """Halve the spans (one zoom level closer)."""
    return region.zoomed(0.5)


def zoom_out(region: BoundingRegion) -> BoundingRegion:
    """Double the spans (one zoom level out)."""
    return region.zoomed(2.0)


@dataclass
class ViewportFitter:
    """Computes padded regions that contain a set of coordinates."""

    padding_ratio: float = DEFAULT_PADDING_RATIO
    """Fraction of the raw span added as padding (split across both edges)."""

    min_span_deg: float = MIN_SPAN_DEG
    """Floor for each span so coincident points still give a usable viewport."""

    def __post_init__(self):
        if not self.padding_ratio >= 0:
            raise ValueError(f"padding_ratio must be >= 0, got {self.padding_ratio!r}")
        if not self.min_span_deg > 0:
            raise ValueError(f"min_span_deg must be > 0, got {self.min_span_deg!r}")

    def fit(self, coords: Iterable[Coordinate]) -> BoundingRegion:
        """
        Return the bounding-box region around ``coords``, padded and floored.

        The center is the bounding-box midpoint, not the coordinates' mean.

        Raises:
            ValueError: If ``coords`` is empty
        """
        coords = list(coords)
        if not coords:
            raise ValueError("Cannot fit a viewport to zero coordinates")

        lats = [c.lat for c in coords]
        lngs = [c.lng for c in coords]
        min_lat, max_lat = min(lats), max(lats)
        min_lng, max_lng = min(lngs), max(lngs)

        scale = 1.0 + self.padding_ratio
        return BoundingRegion(
            center=Coordinate((min_lat + max_lat) / 2, (min_lng + max_lng) / 2),
            lat_span=max((max_lat - min_lat) * scale, self.min_span_deg),
            lng_span=max((max_lng - min_lng) * scale, self.min_span_deg),
        )


def fit_region(coords: Iterable[Coordinate]) -> BoundingRegion:
    """Fit ``coords`` with the default padding and span floor."""
    return ViewportFitter().fit(coords)


__all__ = [
    "DEFAULT_PADDING_RATIO",
    "MIN_SPAN_DEG",
    "BoundingRegion",
    "ViewportFitter",
    "fit_region",
    "zoom_in",
    "zoom_out",
]
