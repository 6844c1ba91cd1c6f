from __future__ import annotations

import math

import pytest

from weatherlike.domain.entities import (
    Coordinates,
    DeviceCondition,
    FetchRequest,
    Layer,
    LocationInfo,
    WeatherPayload,
)


def test_coordinates_accept_ints_and_store_floats():
    coords = Coordinates(40, -74)

    assert coords.as_tuple() == (40.0, -74.0)
    assert isinstance(coords.lat, float)


@pytest.mark.parametrize(
    "lat, lon",
    [
        (math.nan, 0.0),
        (0.0, math.inf),
        (90.5, 0.0),
        (0.0, -180.01),
        (True, 0.0),
        ("40", 0.0),
    ],
)
def test_coordinates_reject_invalid_values(lat, lon):
    with pytest.raises(ValueError):
        Coordinates(lat, lon)


def test_coordinates_label_uses_hemispheres():
    assert Coordinates(40.7128, -74.0060).label() == "40.71°N, 74.01°W"
    assert Coordinates(-33.87, 151.21).label() == "33.87°S, 151.21°E"


def test_fetch_request_for_postal_code_trims():
    request = FetchRequest.for_postal_code("  10001 ")

    assert request.kind == "postal"
    assert request.code == "10001"
    assert request.coordinates is None


def test_fetch_request_rejects_mixed_or_empty_payloads():
    with pytest.raises(ValueError):
        FetchRequest(kind="postal", code="   ")
    with pytest.raises(ValueError):
        FetchRequest(kind="coords")
    with pytest.raises(ValueError):
        FetchRequest(kind="coords", coordinates=Coordinates(1, 2), code="10001")
    with pytest.raises(ValueError):
        FetchRequest(kind="zip", code="10001")  # type: ignore[arg-type]


def test_fetch_request_for_coordinates_describes_point():
    request = FetchRequest.for_coordinates(Coordinates(40.7128, -74.006))

    assert request.coordinates == Coordinates(40.7128, -74.006)
    assert request.code is None
    assert request.describe() == "coords 40.7128,-74.0060"


@pytest.mark.parametrize(
    "width, height, eligible",
    [
        (700, 400, True),
        (768, 400, True),
        (769, 400, False),
        (400, 700, False),
        (500, 500, False),
        (1280, 800, False),
    ],
)
def test_device_condition_presenter_eligibility(width, height, eligible):
    condition = DeviceCondition(width=width, height=height, mobile_breakpoint_px=768)

    assert condition.presenter_eligible is eligible


def test_layer_values_match_display_keys():
    assert [layer.value for layer in Layer] == ["satellite", "rain", "forecast"]


def test_weather_payload_defaults_are_empty():
    payload = WeatherPayload(location=LocationInfo("Somewhere", Coordinates(1, 2)))

    assert payload.hourly == ()
    assert payload.current.temperature_c is None
