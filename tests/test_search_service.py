from concurrent.futures import ThreadPoolExecutor

import pytest

from nearbite.core.errors import InvalidCoordinate, InvalidFilter, MissingRequiredField, SearchError
from nearbite.core.geo import GeoPoint, haversine_km
from nearbite.domain.models import FilterSpec, LocationQuery
from nearbite.search import service as service_module
from nearbite.search.service import SearchService, build_filter_spec

# San Francisco city center, the packaged default search point.
DEFAULT_LAT = 37.7749
DEFAULT_LON = -122.4194


def _ids(result):
    return [item.restaurant.id for item in result.restaurants]


def test_default_origin_returns_five_nearest_in_order(service, six_restaurants):
    result = service.search(None)

    assert _ids(result) == ["r1", "r2", "r3", "r4", "r5"]
    origin = GeoPoint(lat=DEFAULT_LAT, lon=DEFAULT_LON)
    expected = sorted(haversine_km(origin, r.location) for r in six_restaurants)[:5]
    assert [item.distance for item in result.restaurants] == pytest.approx(expected)

    loc = result.search_location
    assert (loc.latitude, loc.longitude) == (DEFAULT_LAT, DEFAULT_LON)
    assert loc.source == "default"
    assert loc.address == "Default location (San Francisco)"


def test_known_address_moves_the_origin(service):
    result = service.search(LocationQuery(address="north point"))
    assert _ids(result) == ["r6", "r5", "r4", "r3", "r2"]
    assert result.search_location.source == "address"
    assert result.search_location.address == "north point"


def test_unknown_address_is_not_an_error(service):
    result = service.search(LocationQuery(address="Atlantis"))
    assert result.search_location.source == "default"
    assert _ids(result)[0] == "r1"


def test_invalid_coordinates_fail_before_ranking(service, monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("rank must not run for invalid input")

    monkeypatch.setattr(service_module, "rank", _fail)
    with pytest.raises(InvalidCoordinate):
        service.search(LocationQuery(latitude=91, longitude=0))
    with pytest.raises(InvalidCoordinate):
        service.search_by_params(lat="abc", lng="0")
    with pytest.raises(MissingRequiredField):
        service.search_by_body({"latitude": 37.7})


def test_search_by_params_parses_query_strings(service):
    result = service.search_by_params(lat=f"{DEFAULT_LAT + 0.06}", lng=f"{DEFAULT_LON}")
    assert _ids(result)[0] == "r6"
    assert result.search_location.source == "coordinates"


def test_search_by_params_blank_coordinates_use_address(service):
    result = service.search_by_params(address="Midway", lat="", lng=" ")
    assert result.search_location.source == "address"
    assert _ids(result)[:2] in (["r3", "r4"], ["r4", "r3"])


def test_search_by_params_rejects_half_a_pair(service):
    with pytest.raises(MissingRequiredField):
        service.search_by_params(lat="37.7")


@pytest.mark.parametrize("lat, lng", [("nan", "0"), ("0", "inf"), ("91", "0"), ("12abc", "0")])
def test_search_by_params_rejects_bad_numbers(service, lat, lng):
    with pytest.raises(InvalidCoordinate):
        service.search_by_params(lat=lat, lng=lng)


def test_filtered_search_returns_only_matching_entries(service):
    # Exactly r3 (4.6) and r6 (4.9) have rating >= 4.5.
    result = service.search_by_body(
        {"latitude": DEFAULT_LAT, "longitude": DEFAULT_LON, "filters": {"minRating": 4.5}}
    )
    assert _ids(result) == ["r3", "r6"]
    assert all(item.restaurant.rating >= 4.5 for item in result.restaurants)


def test_search_by_body_accepts_zero_coordinates(service):
    result = service.search_by_body({"latitude": 0, "longitude": 0})
    assert result.search_location.source == "coordinates"
    assert len(result.restaurants) == 5


@pytest.mark.parametrize(
    "payload, error",
    [
        ({"longitude": 1.0}, MissingRequiredField),
        ({"latitude": None, "longitude": 1.0}, MissingRequiredField),
        ({"latitude": "37.7", "longitude": -122.4}, InvalidCoordinate),
        ({"latitude": 0, "longitude": 181}, InvalidCoordinate),
        ({"latitude": 10**400, "longitude": 0}, InvalidCoordinate),
        ({"latitude": 0, "longitude": 0, "filters": "thai"}, InvalidFilter),
        ({"latitude": 0, "longitude": 0, "filters": {"priceRange": "cheap"}}, InvalidFilter),
        ([1, 2], SearchError),
    ],
)
def test_search_by_body_validation(service, payload, error):
    with pytest.raises(error):
        service.search_by_body(payload)


def test_build_filter_spec_drops_blank_values():
    assert build_filter_spec(None) is None
    assert build_filter_spec({"cuisine": "", "minRating": None, "priceRange": None}) is None
    spec = build_filter_spec({"cuisine": " Thai ", "minRating": "4.5"})
    assert spec == FilterSpec(cuisine="Thai", min_rating=4.5)


def test_result_never_exceeds_catalog_size(resolver, make_restaurant):
    small = SearchService([make_restaurant("only", DEFAULT_LAT, DEFAULT_LON)], resolver, result_cap=5)
    result = small.search(None)
    assert _ids(result) == ["only"]
    assert result.restaurants[0].distance == 0.0


def test_concurrent_searches_do_not_interfere(service):
    def north():
        return service.search(LocationQuery(latitude=DEFAULT_LAT + 0.06, longitude=DEFAULT_LON))

    def filtered():
        return service.search(None, FilterSpec(cuisine="thai"))

    expected_north = _ids(north())
    expected_filtered = _ids(filtered())
    assert expected_north[0] == "r6"
    assert expected_filtered == ["r1", "r3"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(north if i % 2 else filtered) for i in range(200)]
        results = [(i % 2, f.result()) for i, f in enumerate(futures)]

    for is_north, result in results:
        if is_north:
            assert _ids(result) == expected_north
            assert result.search_location.source == "coordinates"
        else:
            assert _ids(result) == expected_filtered
            assert result.search_location.source == "default"
    assert len(service.catalog) == 6


def test_payload_is_flat_entry_plus_distance(service):
    payload = service.search(None).as_payload()
    first = payload["restaurants"][0]
    assert first["id"] == "r1"
    assert first["priceRange"] == "$"
    assert first["openingHours"] == "11:00"
    assert isinstance(first["distance"], float)
    assert payload["searchLocation"] == {
        "latitude": DEFAULT_LAT,
        "longitude": DEFAULT_LON,
        "address": "Default location (San Francisco)",
        "source": "default",
    }
