from __future__ import annotations

import pytest

from weatherlike.domain.entities import Coordinates, LocationInfo, WeatherPayload
from weatherlike.domain.errors import GeolocationError
from weatherlike.usecases.fetch_weather import FetchWeather
from weatherlike.usecases.resolve_location import ResolveLocation
from weatherlike.viewmodels.view_state_vm import ViewStateVM

FALLBACK = Coordinates(40.7128, -74.0060)


class _EchoWeather:
    def __init__(self) -> None:
        self.calls: list = []

    async def get_by_coordinates(self, lat, lon):
        self.calls.append(("coords", (lat, lon)))
        return WeatherPayload(location=LocationInfo(name="Here", coordinates=Coordinates(lat, lon)))

    async def get_by_postal_code(self, code):
        self.calls.append(("postal", code))
        return WeatherPayload(
            location=LocationInfo(name="Chicago, IL", coordinates=Coordinates(41.8858, -87.6181))
        )


class _Geo:
    def __init__(self, position=None, error=None) -> None:
        self.position = position
        self.error = error

    async def current_position(self):
        if self.error is not None:
            raise self.error
        return self.position


def _make():
    state = ViewStateVM(FALLBACK)
    provider = _EchoWeather()
    uc = ResolveLocation(FetchWeather(provider, state), state, FALLBACK)
    return state, provider, uc


@pytest.mark.asyncio
async def test_device_position_is_fetched():
    state, provider, uc = _make()

    await uc.from_device(_Geo(position=Coordinates(51.5074, -0.1278)))

    assert provider.calls == [("coords", (51.5074, -0.1278))]
    assert state.snapshot.coordinates == Coordinates(51.5074, -0.1278)
    assert state.snapshot.error is None


@pytest.mark.asyncio
async def test_denied_location_falls_back_silently():
    state, provider, uc = _make()

    await uc.from_device(_Geo(error=GeolocationError("User denied Geolocation", denied=True)))

    assert provider.calls == [("coords", (40.7128, -74.006))]
    assert state.snapshot.error is None
    assert state.snapshot.coordinates == FALLBACK


@pytest.mark.asyncio
async def test_missing_geolocation_uses_fallback():
    _state, provider, uc = _make()

    await uc.from_device(None)

    assert provider.calls == [("coords", (40.7128, -74.006))]


@pytest.mark.asyncio
async def test_map_point_moves_coordinates_and_fetches():
    state, provider, uc = _make()

    payload = await uc.from_coordinates(-33.8688, 151.2093)

    assert payload is not None
    assert provider.calls == [("coords", (-33.8688, 151.2093))]
    assert state.snapshot.coordinates == Coordinates(-33.8688, 151.2093)


@pytest.mark.asyncio
async def test_invalid_map_point_is_ignored():
    state, provider, uc = _make()

    assert await uc.from_coordinates(95.0, 10.0) is None

    assert provider.calls == []
    assert state.snapshot.coordinates == FALLBACK
    assert state.snapshot.loading is False


@pytest.mark.asyncio
async def test_postal_code_is_trimmed_and_coordinates_follow_result():
    state, provider, uc = _make()

    await uc.from_postal_code("  60601 ")

    assert provider.calls == [("postal", "60601")]
    assert state.snapshot.coordinates == Coordinates(41.8858, -87.6181)
    assert state.snapshot.location == "Chicago, IL"


@pytest.mark.parametrize("raw", [None, "", "   "])
@pytest.mark.asyncio
async def test_blank_postal_code_is_noop(raw):
    state, provider, uc = _make()

    assert await uc.from_postal_code(raw) is None
    assert ResolveLocation.postal_request(raw) is None
    assert provider.calls == []
    assert state.snapshot.loading is False
