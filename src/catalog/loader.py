"""Loading the shop catalog and moving it between entities and dataframes."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from src.spatial.clustering import LocatedEntity

from .schemas import ShopRecord


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent.parent / "data" / "shops.json"

_CORE_COLUMNS = ("id", "name", "lat", "lng")


def load_catalog(path: Optional[Union[str, Path]] = None) -> List[LocatedEntity]:
    """
    Read a JSON list of shop records and validate each one.

    Args:
        path: JSON file to read. If None, the bundled ``data/shops.json``

    Returns:
        Entities in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If any record is malformed
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    with open(catalog_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"Catalog {catalog_path} must contain a JSON list, got {type(raw).__name__}")

    entities = [ShopRecord.model_validate(item).to_entity() for item in raw]
    logger.debug("Loaded %d shops from %s", len(entities), catalog_path)
    return entities


def entities_to_dataframe(entities: Iterable[LocatedEntity]) -> pd.DataFrame:
    """One row per entity: core columns followed by the attribute columns.

    Attributes named like a core column are dropped; the entity's own
    id/name/lat/lng always win.
    """

    rows = []
    for e in entities:
        row = {"id": e.id, "name": e.name, "lat": e.lat, "lng": e.lng}
        row.update((k, v) for k, v in e.attributes.items() if k not in row)
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=list(_CORE_COLUMNS))
    return pd.DataFrame(rows)


def entities_from_dataframe(df: pd.DataFrame) -> List[LocatedEntity]:
    """
    Inverse of :func:`entities_to_dataframe`.

    Columns other than id/name/lat/lng become attributes; NaN attribute
    values (columns missing for some rows) are dropped.

    Raises:
        ValueError: If a core column is missing
    """
    missing = [c for c in _CORE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    extra = [c for c in df.columns if c not in _CORE_COLUMNS]
    entities = []
    for row in df.to_dict(orient="records"):
        attributes = {
            key: row[key]
            for key in extra
            if isinstance(row[key], (list, tuple)) or not pd.isna(row[key])
        }
        entities.append(LocatedEntity(
            id=str(row["id"]),
            name=str(row["name"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            attributes=attributes,
        ))
    return entities
