"""Great-circle distance helpers.

All distances are in metres on a spherical Earth. Ellipsoidal correction is
not applied; the error is negligible at city scale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np


EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance between ``a`` and ``b`` in metres."""

    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, h)))


def haversine_to_many_m(
    point: Coordinate,
    lats: Sequence[float],
    lngs: Sequence[float],
) -> np.ndarray:
    """Vectorised distance from ``point`` to every ``(lats[i], lngs[i])``."""

    lat1 = np.radians(point.lat)
    lat2 = np.radians(np.asarray(lats, dtype=float))
    dlat = lat2 - lat1
    dlng = np.radians(np.asarray(lngs, dtype=float) - point.lng)

    h = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.minimum(1.0, h)))


__all__ = [
    "EARTH_RADIUS_M",
    "Coordinate",
    "haversine_m",
    "haversine_to_many_m",
]
