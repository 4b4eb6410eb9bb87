"""
Location resolution.

Turns a `LocationQuery` into a single search point:
1. explicit coordinates are validated and used as-is (bad values raise `InvalidCoordinate`),
2. free text is matched against the configured known-places table,
3. anything else falls back to the configured default point.

There is no real geocoding here. An address that matches nothing is not an error:
it degrades to the default point and the returned `source` is `"default"`, which is
the only way a caller can tell "not found" apart from "not supplied".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nearbite.config.settings import LocationSettings
from nearbite.core.errors import MissingRequiredField
from nearbite.core.geo import GeoPoint, validate_coordinate
from nearbite.domain.models import LocationQuery, LocationSource

logger = logging.getLogger(__name__)


def normalize_place_text(text: str) -> str:
    """Trim, case-fold and collapse inner whitespace/apostrophes for matching."""
    folded = text.strip().casefold().replace("'", "").replace("’", "")
    return " ".join(folded.split())


@dataclass(frozen=True)
class ResolvedLocation:
    point: GeoPoint
    label: str
    source: LocationSource


@dataclass(frozen=True)
class _PlaceKey:
    key: str
    point: GeoPoint


class LocationResolver:
    """Resolve location queries using a fixed lookup table and a default point."""

    def __init__(self, settings: LocationSettings):
        self._default = ResolvedLocation(
            point=GeoPoint(lat=settings.default.lat, lon=settings.default.lon),
            label=settings.default.label,
            source="default",
        )
        # Flatten to (key, point) in table order so the scan order never depends on input.
        keys: list[_PlaceKey] = []
        for place in settings.known_places:
            point = GeoPoint(lat=place.lat, lon=place.lon)
            for name in (place.name, *place.aliases):
                key = normalize_place_text(name)
                if key:
                    keys.append(_PlaceKey(key=key, point=point))
        self._keys = tuple(keys)

    @property
    def default(self) -> ResolvedLocation:
        return self._default

    def lookup(self, text: str) -> GeoPoint | None:
        """Return the first known place contained in `text`, or None."""
        normalized = normalize_place_text(text)
        if not normalized:
            return None
        for entry in self._keys:
            if entry.key in normalized:
                return entry.point
        return None

    def resolve(self, query: LocationQuery | None) -> ResolvedLocation:
        if query is None:
            return self._default

        if query.has_coordinates():
            if query.latitude is None or query.longitude is None:
                raise MissingRequiredField("Both latitude and longitude are required")
            point = validate_coordinate(query.latitude, query.longitude)
            return ResolvedLocation(point=point, label=f"{point.lat:.6f}, {point.lon:.6f}", source="coordinates")

        address = (query.address or "").strip()
        if address:
            point = self.lookup(address)
            if point is not None:
                return ResolvedLocation(point=point, label=address, source="address")
            logger.info("Unresolved address %r; using default location.", address)

        return self._default
