"""
src/catalog: The shop catalog feeding the map.

Validated records, JSON loading, dataframe conversion and the filters that
decide which entities are visible.
"""

from .filters import EntityFilter, filter_entities
from .loader import (
    DEFAULT_CATALOG_PATH,
    entities_from_dataframe,
    entities_to_dataframe,
    load_catalog,
)
from .schemas import BrewingMethod, District, RoastLevel, ShopRecord

__all__ = [
    "BrewingMethod",
    "DEFAULT_CATALOG_PATH",
    "District",
    "EntityFilter",
    "RoastLevel",
    "ShopRecord",
    "entities_from_dataframe",
    "entities_to_dataframe",
    "filter_entities",
    "load_catalog",
]
