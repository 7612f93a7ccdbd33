"""
Map session: explicit reclustering driven by camera-change callbacks.

The cluster engine is a pure function with no throttle. This module is the
caller side of it for one map view: it remembers the current region, decides
when a camera change is large enough to recluster, and turns cluster taps into
either a selected entity or a new region to zoom into.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from src.tools.config_loader import ConfigLoader

from .clustering import Cluster, ClusterEngine, LocatedEntity
from .geo import Coordinate
from .viewport import (
    DEFAULT_PADDING_RATIO,
    MIN_SPAN_DEG,
    BoundingRegion,
    ViewportFitter,
    zoom_in,
    zoom_out,
)
from .zoom_policy import ZoomPolicy


logger = logging.getLogger(__name__)


DEFAULT_INITIAL_REGION = BoundingRegion(
    center=Coordinate(40.7128, -74.0060),
    lat_span=0.1,
    lng_span=0.1,
)


@dataclass
class MapSessionConfig:
    """Configuration for a :class:`MapSession`."""

    policy: ZoomPolicy = field(default_factory=ZoomPolicy)
    """Zoom to threshold mapping."""

    fitter: ViewportFitter = field(default_factory=ViewportFitter)
    """Padding and span floor for zoom-to-fit."""

    min_zoom_delta: float = 1.0
    """Zoom change (levels) required before a camera change reclusters."""

    initial_region: BoundingRegion = DEFAULT_INITIAL_REGION
    """Region shown before the first camera change."""

    def __post_init__(self):
        if not self.min_zoom_delta >= 0:
            raise ValueError(f"min_zoom_delta must be >= 0, got {self.min_zoom_delta!r}")

    @classmethod
    def from_profile(cls, name: Optional[str] = None) -> "MapSessionConfig":
        """Build from a named profile, or the ``MAP_PROFILE``/default one when None."""
        return cls.from_config(ConfigLoader.load_profile(name))

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "MapSessionConfig":
        """Build from a loaded profile (see ``configs/default.yaml``)."""
        config = config or {}
        viewport = config.get("viewport") or {}
        session = config.get("session") or {}
        region = session.get("initial_region")

        return cls(
            policy=ZoomPolicy.from_config(config.get("zoom_policy")),
            fitter=ViewportFitter(
                padding_ratio=float(viewport.get("padding_ratio", DEFAULT_PADDING_RATIO)),
                min_span_deg=float(viewport.get("min_span_deg", MIN_SPAN_DEG)),
            ),
            min_zoom_delta=float(session.get("min_zoom_delta", 1.0)),
            initial_region=(
                BoundingRegion(
                    center=Coordinate(float(region["lat"]), float(region["lng"])),
                    lat_span=float(region["lat_span"]),
                    lng_span=float(region["lng_span"]),
                )
                if region
                else DEFAULT_INITIAL_REGION
            ),
        )


@dataclass
class TapResult:
    """Outcome of tapping a marker: a selection, a region, or both."""

    selected: Optional[LocatedEntity] = None
    region: Optional[BoundingRegion] = None


class MapSession:
    """
    Clustering state for one map view.

    Not thread-safe; create one per view. Clusters are rebuilt from scratch
    on every recluster and carry no identity across passes.
    """

    def __init__(
        self,
        entities: Sequence[LocatedEntity] = (),
        region: Optional[BoundingRegion] = None,
        config: Optional[MapSessionConfig] = None,
    ):
        self.config = config or MapSessionConfig()
        self.engine = ClusterEngine(self.config.policy)
        self.region = region or self.config.initial_region
        self.selected: Optional[LocatedEntity] = None
        self._entities: List[LocatedEntity] = list(entities)
        self.clusters: List[Cluster] = []
        self._recluster()

    @classmethod
    def from_profile(
        cls,
        entities: Sequence[LocatedEntity] = (),
        profile: Optional[str] = None,
        region: Optional[BoundingRegion] = None,
    ) -> "MapSession":
        """Session configured from a YAML profile (see :class:`ConfigLoader`)."""
        return cls(entities, region=region, config=MapSessionConfig.from_profile(profile))

    @property
    def entities(self) -> List[LocatedEntity]:
        return list(self._entities)

    @property
    def zoom_level(self) -> float:
        return self.region.zoom_level

    @property
    def threshold_m(self) -> float:
        """Threshold the current clusters were built with, not the live camera's."""
        return self._clustered_threshold

    def _recluster(self) -> List[Cluster]:
        self._clustered_zoom = self.zoom_level
        self._clustered_threshold = self.config.policy.threshold_meters(self._clustered_zoom)
        self.clusters = self.engine.cluster(self._entities, self._clustered_threshold)
        logger.debug(
            "Reclustered %d entities at zoom %.2f (%.0fm): %d clusters",
            len(self._entities), self._clustered_zoom, self._clustered_threshold, len(self.clusters),
        )
        return self.clusters

    def on_camera_change(self, region: BoundingRegion) -> Optional[List[Cluster]]:
        """
        Record the new camera region; recluster if the zoom moved enough.

        Returns:
            The fresh clusters, or None when the change was below
            ``min_zoom_delta`` and the previous clusters still stand.
        """
        self.region = region
        if abs(self.zoom_level - self._clustered_zoom) < self.config.min_zoom_delta:
            return None
        return self._recluster()

    def set_entities(self, entities: Sequence[LocatedEntity]) -> List[Cluster]:
        """Replace the visible entities (e.g. after a filter change) and recluster."""
        self._entities = list(entities)
        if self.selected is not None and self.selected not in self._entities:
            self.selected = None
        return self._recluster()

    def center_on(self, entity: LocatedEntity) -> BoundingRegion:
        """Region centered on a single entity at the minimum span."""
        return self.config.fitter.fit([entity.coordinate])

    def tap_cluster(self, cluster: Cluster) -> TapResult:
        """
        Handle a tap on a marker.

        A singleton selects its entity and centers on it. A multi-member
        cluster expands to the region fitted around its members; the camera
        change that follows goes through :meth:`on_camera_change`.
        """
        if cluster.is_singleton:
            entity = cluster.members[0]
            self.selected = entity
            return TapResult(selected=entity, region=self.center_on(entity))

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Expanding cluster of %d: %s",
                cluster.size, ", ".join(m.name for m in cluster.members),
            )
        return TapResult(region=self.config.fitter.fit(cluster.coordinates()))

    def zoom_in(self) -> Optional[List[Cluster]]:
        return self.on_camera_change(zoom_in(self.region))

    def zoom_out(self) -> Optional[List[Cluster]]:
        return self.on_camera_change(zoom_out(self.region))

    def clear_selection(self) -> None:
        self.selected = None


__all__ = [
    "DEFAULT_INITIAL_REGION",
    "MapSession",
    "MapSessionConfig",
    "TapResult",
]
