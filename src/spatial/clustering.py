"""
Greedy first-fit proximity clustering for map markers.

This module provides:
1. ``LocatedEntity`` and ``Cluster`` data types
2. ``cluster_entities``: the single-pass clustering algorithm
3. ``ClusterEngine``: the algorithm bundled with a zoom policy
4. Diagnostics and a dataframe export for debugging

Algorithm:
- Entities are visited in descending latitude (stable for ties), so repeated
  calls over the same input produce the same clusters.
- Each entity joins the *first* cluster, in creation order, whose current
  centroid lies within the threshold; otherwise it seeds a new cluster.
- A cluster's centroid is recomputed as the plain mean of its members after
  every join.

Known inexactness: centroids drift as clusters grow, so a late joiner can be
farther than the threshold from older members, and an entity may land in a
different cluster than it would have against the seed point. Visual behavior
depends on this exact policy; do not replace it with nearest-centroid or
density-based assignment.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .geo import Coordinate, haversine_to_many_m
from .zoom_policy import ZoomPolicy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocatedEntity:
    """A point of interest placed on the map."""

    id: str
    name: str
    lat: float
    lng: float
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    """Free-form metadata for filtering; never read by the engine."""

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)


class Cluster:
    """
    A group of one or more entities rendered as a single marker.

    Clusters grow by :meth:`add_member` during one clustering pass and are
    discarded on the next; there is no removal. The identifier is fresh for
    every instance and carries no meaning across passes.
    """

    def __init__(self, seed: LocatedEntity):
        self.id: str = uuid.uuid4().hex
        self._members: List[LocatedEntity] = []
        self._centroid = Coordinate(seed.lat, seed.lng)
        self.add_member(seed)

    def add_member(self, entity: LocatedEntity) -> None:
        """Append ``entity`` and recompute the centroid."""
        self._members.append(entity)
        self.recompute_centroid()

    def recompute_centroid(self) -> None:
        """
        Set the centroid to the arithmetic mean of member coordinates.

        The mean is clamped to the members' range on each axis; rounding in
        the sum must not move the centroid of coincident points off them.
        """
        lats = np.fromiter((m.lat for m in self._members), dtype=float)
        lngs = np.fromiter((m.lng for m in self._members), dtype=float)
        self._centroid = Coordinate(
            float(np.clip(lats.mean(), lats.min(), lats.max())),
            float(np.clip(lngs.mean(), lngs.min(), lngs.max())),
        )

    @property
    def centroid(self) -> Coordinate:
        return self._centroid

    @property
    def members(self) -> Tuple[LocatedEntity, ...]:
        """Members in insertion order."""
        return tuple(self._members)

    @property
    def size(self) -> int:
        return len(self._members)

    @property
    def is_singleton(self) -> bool:
        return len(self._members) == 1

    def coordinates(self) -> List[Coordinate]:
        return [m.coordinate for m in self._members]

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return (
            f"Cluster(id={self.id[:8]}, size={self.size}, "
            f"centroid=({self._centroid.lat:.5f}, {self._centroid.lng:.5f}))"
        )


@dataclass
class ClusteringDiagnostics:
    """Summary of one clustering pass."""

    num_points: int
    """Total number of entities clustered."""

    num_clusters: int
    """Number of clusters produced."""

    threshold_m: float
    """Merge radius used for the pass."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, in creation order."""

    num_singletons: int = 0
    """Clusters holding a single entity (rendered as plain markers)."""

    largest_cluster_size: int = 0
    """Size of the biggest cluster (0 for empty input)."""


def cluster_entities(
    entities: Sequence[LocatedEntity],
    threshold_m: float,
) -> List[Cluster]:
    """
    Partition ``entities`` into proximity clusters.

    Args:
        entities: Entities to cluster. Read only; never mutated.
        threshold_m: Maximum entity-to-centroid distance (metres) for joining
            an existing cluster. Zero merges exactly coincident points only.

    Returns:
        Clusters in creation order. Every entity appears in exactly one.

    Raises:
        ValueError: If ``threshold_m`` is negative
    """
    if threshold_m < 0:
        raise ValueError(f"threshold_m must be non-negative, got {threshold_m}")

    # sorted() is stable, so equal latitudes keep their input order
    ordered = sorted(entities, key=lambda e: -e.lat)

    clusters: List[Cluster] = []
    centroid_lats: List[float] = []
    centroid_lngs: List[float] = []
    debug = logger.isEnabledFor(logging.DEBUG)

    for entity in ordered:
        target: Optional[int] = None

        if clusters:
            distances = haversine_to_many_m(entity.coordinate, centroid_lats, centroid_lngs)
            within = np.flatnonzero(distances <= threshold_m)
            if within.size:
                target = int(within[0])

            if debug:
                nearest = int(np.argmin(distances))
                logger.debug(
                    "Entity %s: nearest centroid %.1fm (cluster #%d), first fit %s",
                    entity.name, distances[nearest], nearest,
                    "none" if target is None else f"#{target}",
                )

        if target is None:
            clusters.append(Cluster(entity))
            centroid_lats.append(entity.lat)
            centroid_lngs.append(entity.lng)
            continue

        cluster = clusters[target]
        cluster.add_member(entity)
        centroid_lats[target] = cluster.centroid.lat
        centroid_lngs[target] = cluster.centroid.lng

    if debug:
        logger.debug(
            "Clustered %d entities into %d clusters at %.0fm",
            len(ordered), len(clusters), threshold_m,
        )

    return clusters


def summarize_clusters(clusters: Sequence[Cluster], threshold_m: float) -> ClusteringDiagnostics:
    """Build :class:`ClusteringDiagnostics` for a finished pass."""
    sizes = [c.size for c in clusters]
    return ClusteringDiagnostics(
        num_points=sum(sizes),
        num_clusters=len(clusters),
        threshold_m=threshold_m,
        cluster_sizes=sizes,
        num_singletons=sum(1 for s in sizes if s == 1),
        largest_cluster_size=max(sizes, default=0),
    )


def clusters_to_dataframe(clusters: Iterable[Cluster]) -> pd.DataFrame:
    """Flatten clusters into one row per member."""
    columns = ["cluster_id", "cluster_size", "centroid_lat", "centroid_lng", "id", "name", "lat", "lng"]
    records = [
        {
            "cluster_id": cluster.id,
            "cluster_size": cluster.size,
            "centroid_lat": cluster.centroid.lat,
            "centroid_lng": cluster.centroid.lng,
            "id": member.id,
            "name": member.name,
            "lat": member.lat,
            "lng": member.lng,
        }
        for cluster in clusters
        for member in cluster.members
    ]
    return pd.DataFrame(records, columns=columns)


class ClusterEngine:
    """
    Cluster engine bound to a zoom policy.

    Stateless between calls: every call builds fresh clusters, so one engine
    can serve any number of map views.
    """

    def __init__(self, policy: Optional[ZoomPolicy] = None):
        self.policy = policy or ZoomPolicy()

    def cluster(self, entities: Sequence[LocatedEntity], threshold_m: float) -> List[Cluster]:
        return cluster_entities(entities, threshold_m)

    def cluster_for_zoom(self, entities: Sequence[LocatedEntity], zoom: float) -> List[Cluster]:
        """Cluster with the policy's threshold for ``zoom``."""
        return cluster_entities(entities, self.policy.threshold_meters(zoom))

    def cluster_with_diagnostics(
        self,
        entities: Sequence[LocatedEntity],
        zoom: float,
    ) -> Tuple[List[Cluster], ClusteringDiagnostics]:
        threshold = self.policy.threshold_meters(zoom)
        clusters = cluster_entities(entities, threshold)
        return clusters, summarize_clusters(clusters, threshold)


__all__ = [
    "Cluster",
    "ClusterEngine",
    "ClusteringDiagnostics",
    "LocatedEntity",
    "cluster_entities",
    "clusters_to_dataframe",
    "summarize_clusters",
]
