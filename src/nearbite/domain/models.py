"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- catalog entities (`Restaurant`), loaded once and shared read-only
- optional attribute filters (`FilterSpec`)
- per-request output (`RankedRestaurant`, `SearchResult`)

JSON payloads use camelCase keys (`priceRange`, `minRating`, ...) while Python code
uses snake_case attributes; both spellings are accepted on input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from nearbite.core.geo import GeoPoint

PriceRange = Literal["$", "$$", "$$$", "$$$$"]
LocationSource = Literal["coordinates", "address", "default"]

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Restaurant(BaseModel):
    """A catalog entry: one searchable restaurant with a fixed location."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    address: str = ""
    cuisine: str
    rating: float = Field(..., ge=0, le=5)
    price_range: PriceRange
    # HH:MM; closing earlier than opening means the window wraps past midnight.
    opening_hours: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    closing_hours: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    phone: str = ""
    description: str = ""

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.latitude, lon=self.longitude)


class FilterSpec(BaseModel):
    """Optional attribute filters, combined with logical AND."""

    model_config = _CAMEL

    cuisine: str | None = None
    min_rating: float | None = Field(default=None, allow_inf_nan=False)
    price_range: PriceRange | None = None

    @field_validator("cuisine")
    @classmethod
    def _blank_cuisine_is_absent(cls, cuisine: str | None) -> str | None:
        if cuisine is None or not cuisine.strip():
            return None
        return cuisine.strip()

    def is_empty(self) -> bool:
        return self.cuisine is None and self.min_rating is None and self.price_range is None


@dataclass(frozen=True)
class LocationQuery:
    """Raw location input; coordinates are validated by the resolver, not here."""

    latitude: Any = None
    longitude: Any = None
    address: str | None = None

    def has_coordinates(self) -> bool:
        return self.latitude is not None or self.longitude is not None


class RankedRestaurant(BaseModel):
    """One ranked output item: restaurant + its distance (km) from the search point."""

    restaurant: Restaurant
    distance: float = Field(..., ge=0)

    def as_payload(self) -> dict[str, Any]:
        return {**self.restaurant.model_dump(mode="json", by_alias=True), "distance": self.distance}


class SearchLocation(BaseModel):
    """The resolved search point plus a label describing how it was obtained."""

    latitude: float
    longitude: float
    address: str
    source: LocationSource


class SearchResult(BaseModel):
    """Nearest restaurants (ascending distance, capped) plus the search location."""

    restaurants: list[RankedRestaurant]
    search_location: SearchLocation

    def as_payload(self) -> dict[str, Any]:
        return {
            "restaurants": [r.as_payload() for r in self.restaurants],
            "searchLocation": self.search_location.model_dump(mode="json"),
        }
