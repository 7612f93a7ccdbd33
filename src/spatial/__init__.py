"""
src/spatial: Map clustering, zoom policy, and viewport utilities.

This module provides greedy proximity clustering for map markers, the
zoom-to-threshold policy that drives it, and zoom-to-fit regions.
"""

from .clustering import (
    Cluster,
    ClusterEngine,
    ClusteringDiagnostics,
    LocatedEntity,
    cluster_entities,
    clusters_to_dataframe,
    summarize_clusters,
)
from .geo import Coordinate, EARTH_RADIUS_M, haversine_m, haversine_to_many_m
from .session import MapSession, MapSessionConfig, TapResult
from .viewport import BoundingRegion, ViewportFitter, fit_region, zoom_in, zoom_out
from .zoom_policy import DEFAULT_ZOOM_POLICY, ZoomPolicy, threshold_meters, zoom_from_span

__all__ = [
    "BoundingRegion",
    "Cluster",
    "ClusterEngine",
    "ClusteringDiagnostics",
    "Coordinate",
    "DEFAULT_ZOOM_POLICY",
    "EARTH_RADIUS_M",
    "LocatedEntity",
    "MapSession",
    "MapSessionConfig",
    "TapResult",
    "ViewportFitter",
    "ZoomPolicy",
    "cluster_entities",
    "clusters_to_dataframe",
    "fit_region",
    "haversine_m",
    "haversine_to_many_m",
    "summarize_clusters",
    "threshold_meters",
    "zoom_from_span",
    "zoom_in",
    "zoom_out",
]
