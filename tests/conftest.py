import pytest

from nearbite.config.settings import DefaultLocation, KnownPlace, LocationSettings
from nearbite.domain.models import Restaurant
from nearbite.location.resolver import LocationResolver
from nearbite.search.service import SearchService

DEFAULT_LAT = 37.7749
DEFAULT_LON = -122.4194


def _restaurant(id: str, lat: float, lon: float, **overrides) -> Restaurant:
    data = {
        "id": id,
        "name": f"Restaurant {id}",
        "address": f"{id} Test St",
        "cuisine": "American",
        "rating": 4.0,
        "priceRange": "$$",
        "openingHours": "11:00",
        "closingHours": "22:00",
        "latitude": lat,
        "longitude": lon,
        "phone": "(415) 555-0000",
        "description": "",
    }
    data.update(overrides)
    return Restaurant.model_validate(data)


@pytest.fixture
def make_restaurant():
    """Factory for catalog rows; keyword overrides use the JSON (camelCase) keys."""
    return _restaurant


@pytest.fixture
def six_restaurants() -> tuple[Restaurant, ...]:
    # Due north of the default point at 0.01 degree steps, listed out of order.
    # Along a meridian the distance is 6371 * radians(offset) km.
    return (
        _restaurant("r3", DEFAULT_LAT + 0.03, DEFAULT_LON, cuisine="Thai", rating=4.6, priceRange="$"),
        _restaurant("r6", DEFAULT_LAT + 0.06, DEFAULT_LON, cuisine="Italian", rating=4.9),
        _restaurant("r1", DEFAULT_LAT + 0.01, DEFAULT_LON, cuisine="thai", rating=3.5, priceRange="$"),
        _restaurant("r5", DEFAULT_LAT + 0.05, DEFAULT_LON, cuisine="Mexican", rating=4.2, priceRange="$"),
        _restaurant("r2", DEFAULT_LAT + 0.02, DEFAULT_LON, cuisine="Japanese", rating=4.0, priceRange="$$$"),
        _restaurant("r4", DEFAULT_LAT + 0.04, DEFAULT_LON, cuisine="Thai Fusion", rating=4.4),
    )


@pytest.fixture
def resolver() -> LocationResolver:
    return LocationResolver(
        LocationSettings(
            default=DefaultLocation(label="Default location (San Francisco)", lat=DEFAULT_LAT, lon=DEFAULT_LON),
            known_places=[
                KnownPlace(name="North Point", lat=DEFAULT_LAT + 0.06, lon=DEFAULT_LON),
                KnownPlace(name="Midway", lat=DEFAULT_LAT + 0.035, lon=DEFAULT_LON),
            ],
        )
    )


@pytest.fixture
def service(six_restaurants, resolver) -> SearchService:
    return SearchService(six_restaurants, resolver, result_cap=5)
