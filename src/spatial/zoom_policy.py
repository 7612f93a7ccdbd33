"""
Zoom-adaptive clustering thresholds.

Maps a viewport zoom level to the merge radius used by the cluster engine.
Coarser zoom means a wider radius, which keeps the marker count roughly
constant regardless of viewport scale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


# (min_zoom, threshold_m); bands are half-open [min_zoom, next_min_zoom)
DEFAULT_ZOOM_BANDS: List[Tuple[float, float]] = [
    (-math.inf, 2000.0),
    (10.0, 1000.0),
    (12.0, 500.0),
    (14.0, 200.0),
]


def zoom_from_span(lat_span_deg: float) -> float:
    """
    Derive a zoom level from the viewport's latitudinal span.

    ``zoom = log2(360 / span)``, so a span of 360 degrees is zoom 0 and every
    halving of the span adds one level.

    Raises:
        ValueError: If ``lat_span_deg`` is not positive
    """
    if not lat_span_deg > 0:
        raise ValueError(f"Latitudinal span must be positive, got {lat_span_deg!r}")
    return math.log2(360.0 / lat_span_deg)


@dataclass
class ZoomPolicy:
    """Step function from zoom level to cluster threshold (metres)."""

    bands: List[Tuple[float, float]] = field(
        default_factory=lambda: list(DEFAULT_ZOOM_BANDS)
    )
    """(min_zoom, threshold_m) pairs, ascending by min_zoom."""

    def __post_init__(self):
        if not self.bands:
            raise ValueError("ZoomPolicy needs at least one band")

        self.bands = [(float(z), float(t)) for z, t in self.bands]
        for (z_prev, t_prev), (z_next, t_next) in zip(self.bands, self.bands[1:]):
            if z_next <= z_prev:
                raise ValueError(
                    f"Zoom bands must ascend: {z_next} follows {z_prev}"
                )
            if t_next > t_prev:
                raise ValueError(
                    f"Thresholds must not grow with zoom: {t_next}m at zoom {z_next} "
                    f"exceeds {t_prev}m at zoom {z_prev}"
                )
        if any(t < 0 for _, t in self.bands):
            raise ValueError("Thresholds must be non-negative")

    def threshold_meters(self, zoom: float) -> float:
        """
        Return the merge radius for ``zoom``.

        Total over all real values: zooms below the first band start fall
        into the first band, huge zooms into the last.
        """
        threshold = self.bands[0][1]
        for min_zoom, band_threshold in self.bands:
            if zoom >= min_zoom:
                threshold = band_threshold
            else:
                break
        return threshold

    def threshold_for_span(self, lat_span_deg: float) -> float:
        """Shortcut for ``threshold_meters(zoom_from_span(lat_span_deg))``."""
        return self.threshold_meters(zoom_from_span(lat_span_deg))

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "ZoomPolicy":
        """
        Build a policy from a profile's ``zoom_policy`` section.

        YAML Format:
            ```yaml
            zoom_policy:
              bands:
                - {min_zoom: null, threshold_m: 2000}
                - {min_zoom: 10, threshold_m: 1000}
            ```

        A ``null`` min_zoom stands for negative infinity. A missing section
        yields the default policy.
        """
        if not config or not config.get("bands"):
            return cls()

        bands = []
        for band in config["bands"]:
            min_zoom = band.get("min_zoom")
            bands.append((
                -math.inf if min_zoom is None else float(min_zoom),
                float(band["threshold_m"]),
            ))
        return cls(bands=bands)

    def to_dict(self) -> Dict[str, Any]:
        """Inverse of :meth:`from_config`."""
        return {
            "bands": [
                {"min_zoom": None if math.isinf(z) else z, "threshold_m": t}
                for z, t in self.bands
            ]
        }


DEFAULT_ZOOM_POLICY = ZoomPolicy()


def threshold_meters(zoom: float) -> float:
    """Threshold for ``zoom`` under the default policy."""
    return DEFAULT_ZOOM_POLICY.threshold_meters(zoom)


__all__ = [
    "DEFAULT_ZOOM_BANDS",
    "DEFAULT_ZOOM_POLICY",
    "ZoomPolicy",
    "threshold_meters",
    "zoom_from_span",
]
