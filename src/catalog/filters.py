"""
Catalog filters: district, roast level and brewing method.

Produces the "visible" entity list the map clusters. Unset fields do not
filter; set fields combine with AND. Input order is preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from src.spatial.clustering import LocatedEntity

from .loader import entities_to_dataframe
from .schemas import BrewingMethod, District, RoastLevel


def _value(field_value) -> Optional[str]:
    if field_value is None:
        return None
    return field_value.value if hasattr(field_value, "value") else str(field_value)


@dataclass
class EntityFilter:
    """Active filter selection; None means "any"."""

    district: Optional[Union[District, str]] = None
    roast_level: Optional[Union[RoastLevel, str]] = None
    brewing_method: Optional[Union[BrewingMethod, str]] = None

    @property
    def is_active(self) -> bool:
        return any(v is not None for v in (self.district, self.roast_level, self.brewing_method))

    def mask(self, df: pd.DataFrame) -> np.ndarray:
        """Boolean row mask over an :func:`entities_to_dataframe` frame."""
        keep = np.ones(len(df), dtype=bool)

        district = _value(self.district)
        if district is not None:
            keep &= (df.get("district", pd.Series(index=df.index, dtype=object)) == district).to_numpy()

        roast = _value(self.roast_level)
        if roast is not None:
            keep &= (df.get("roast_level", pd.Series(index=df.index, dtype=object)) == roast).to_numpy()

        method = _value(self.brewing_method)
        if method is not None:
            methods = df.get("brewing_methods", pd.Series(index=df.index, dtype=object))
            keep &= methods.apply(
                lambda value: isinstance(value, (list, tuple)) and method in value
            ).to_numpy(dtype=bool)

        return keep


def filter_entities(
    entities: Sequence[LocatedEntity],
    entity_filter: Optional[EntityFilter] = None,
) -> List[LocatedEntity]:
    """Return the entities matching ``entity_filter``, in input order."""

    if entity_filter is None or not entity_filter.is_active or not entities:
        return list(entities)

    df = entities_to_dataframe(entities)
    keep = entity_filter.mask(df)
    return [entity for entity, kept in zip(entities, keep) if kept]
