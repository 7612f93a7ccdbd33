"""
Pytest configuration and shared fixtures for map clustering tests.

This file provides:
- Sample shop entities (the bundled New York catalog)
- Small hand-built point sets for clustering edge cases
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pytest

from src.spatial.clustering import LocatedEntity


# ==============================================================================
# Test Data Paths
# ==============================================================================

@pytest.fixture
def catalog_path() -> Path:
    """Path to the bundled shop catalog."""
    return Path(__file__).parent.parent / "data" / "shops.json"


# ==============================================================================
# Sample Shop Data
# ==============================================================================

@pytest.fixture
def sample_shop_records() -> List[Dict[str, Any]]:
    """Raw catalog records, as stored in ``data/shops.json``."""
    with open(Path(__file__).parent.parent / "data" / "shops.json") as f:
        return json.load(f)


@pytest.fixture
def sample_shops(sample_shop_records) -> List[LocatedEntity]:
    """The eight New York shops as bare entities (no attributes)."""
    return [
        LocatedEntity(id=r["id"], name=r["name"], lat=r["lat"], lng=r["lng"])
        for r in sample_shop_records
    ]


@pytest.fixture
def manhattan_trio() -> List[LocatedEntity]:
    """Two shops ~85m apart in Flatiron plus one ~4km south in Tribeca."""
    return [
        LocatedEntity(id="a", name="Flatiron A", lat=40.745, lng=-73.987),
        LocatedEntity(id="b", name="Flatiron B", lat=40.745, lng=-73.988),
        LocatedEntity(id="c", name="Tribeca", lat=40.710, lng=-74.006),
    ]


@pytest.fixture
def random_entities() -> List[LocatedEntity]:
    """Forty pseudo-random points over lower Manhattan (seeded)."""
    rng = np.random.default_rng(42)
    lats = rng.uniform(40.70, 40.76, size=40)
    lngs = rng.uniform(-74.02, -73.95, size=40)
    return [
        LocatedEntity(id=f"r{i}", name=f"Random {i}", lat=float(lat), lng=float(lng))
        for i, (lat, lng) in enumerate(zip(lats, lngs))
    ]
