"""Pydantic models for catalog records."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from src.spatial.clustering import LocatedEntity


class District(str, Enum):
    DOWNTOWN = "Downtown"
    BROOKLYN = "Brooklyn"
    QUEENS = "Queens"
    MANHATTAN = "Manhattan"


class RoastLevel(str, Enum):
    LIGHT = "Light"
    MEDIUM = "Medium"
    DARK = "Dark"


class BrewingMethod(str, Enum):
    ESPRESSO = "Espresso"
    POUR_OVER = "Pour Over"
    FRENCH_PRESS = "French Press"
    AEROPRESS = "AeroPress"
    CHEMEX = "Chemex"
    COLD_BREW = "Cold Brew"


class ShopRecord(BaseModel):
    """A coffee shop as stored in the catalog.

    Validation rejects out-of-range or NaN coordinates, so anything that
    reaches the cluster engine through the catalog is well formed.
    """

    id: str = Field(..., min_length=1)
    name: str
    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False, description="Latitude in decimal degrees")
    lng: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False, description="Longitude in decimal degrees")
    address: str = ""
    district: District
    roast_level: RoastLevel
    brewing_methods: List[BrewingMethod] = Field(default_factory=list)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    review_count: int = Field(0, ge=0)

    @field_validator("brewing_methods")
    @classmethod
    def _dedupe_methods(cls, value: List[BrewingMethod]) -> List[BrewingMethod]:
        return list(dict.fromkeys(value))

    def to_entity(self) -> LocatedEntity:
        """Project onto the engine's entity type, keeping filter fields as attributes."""

        return LocatedEntity(
            id=self.id,
            name=self.name,
            lat=self.lat,
            lng=self.lng,
            attributes={
                "address": self.address,
                "district": self.district.value,
                "roast_level": self.roast_level.value,
                "brewing_methods": [m.value for m in self.brewing_methods],
                "rating": self.rating,
                "review_count": self.review_count,
            },
        )
