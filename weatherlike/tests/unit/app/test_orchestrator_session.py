from __future__ import annotations

import asyncio

import pytest

from weatherlike.adapters.api_errors import ApiServerError
from weatherlike.adapters.signals import DeviceSignals, StaticGeolocation, StaticViewport
from weatherlike.adapters.weather_mock import WeatherMock
from weatherlike.app.orchestrator import Orchestrator
from weatherlike.domain.entities import Coordinates, Layer, ScreenMode


class _Effect:
    def __init__(self) -> None:
        self.events: list = []

    def start(self) -> None:
        self.events.append("start")

    def stop(self) -> None:
        self.events.append("stop")


def _make(width=1280, height=800, *, geolocation=None, weather=None, effect=None):
    signals = DeviceSignals.create()
    viewport = StaticViewport(width, height, changes=signals.resize)
    weather = weather or WeatherMock()
    orchestrator = Orchestrator(
        weather_port=weather,
        viewport=viewport,
        signals=signals,
        geolocation=geolocation or StaticGeolocation(denied=True),
        effect=effect,
    )
    return orchestrator, signals, viewport, weather


@pytest.mark.asyncio
async def test_start_fetches_fallback_when_location_denied():
    orchestrator, _signals, _viewport, weather = _make()

    async with orchestrator:
        await orchestrator.wait_idle()
        snap = orchestrator.snapshot

    assert weather.calls == [("coords", (40.7128, -74.006))]
    assert snap.screen_mode is ScreenMode.LANDING
    assert snap.loading is False
    assert snap.error is None
    assert snap.weather_data is not None


@pytest.mark.asyncio
async def test_start_uses_device_position_when_granted():
    orchestrator, _signals, _viewport, weather = _make(
        geolocation=StaticGeolocation(position=Coordinates(41.8858, -87.6181))
    )

    async with orchestrator:
        await orchestrator.wait_idle()

    assert weather.calls == [("coords", (41.8858, -87.6181))]
    assert orchestrator.snapshot.location == "Chicago, IL"


@pytest.mark.asyncio
async def test_enter_app_stops_effect_and_picks_mode():
    effect = _Effect()
    orchestrator, _signals, _viewport, _weather = _make(700, 400, effect=effect)

    async with orchestrator:
        assert orchestrator.landing.running is True
        assert orchestrator.enter_app() is ScreenMode.PRESENTER

    assert effect.events == ["start", "stop"]


@pytest.mark.asyncio
async def test_landing_falls_back_without_effect():
    orchestrator, *_ = _make()

    async with orchestrator:
        assert orchestrator.landing.use_fallback is True


@pytest.mark.asyncio
async def test_resize_and_orientation_signals_recheck_mode():
    orchestrator, signals, viewport, _weather = _make(1280, 800)

    async with orchestrator:
        orchestrator.enter_app()
        assert orchestrator.snapshot.screen_mode is ScreenMode.MAIN

        viewport.resize(700, 400)
        assert orchestrator.snapshot.screen_mode is ScreenMode.PRESENTER

        viewport.width, viewport.height = 400, 700
        signals.orientation_change.emit()
        assert orchestrator.snapshot.screen_mode is ScreenMode.MAIN


@pytest.mark.asyncio
async def test_close_presenter_signal_returns_to_main_until_resize():
    orchestrator, signals, viewport, _weather = _make(700, 400)

    async with orchestrator:
        orchestrator.enter_app()
        signals.close_presenter.emit()
        assert orchestrator.snapshot.screen_mode is ScreenMode.MAIN

        viewport.resize(700, 400)
        assert orchestrator.snapshot.screen_mode is ScreenMode.PRESENTER


@pytest.mark.asyncio
async def test_signals_ignored_on_landing():
    orchestrator, signals, viewport, _weather = _make(1280, 800)

    async with orchestrator:
        viewport.resize(700, 400)
        signals.close_presenter.emit()
        assert orchestrator.snapshot.screen_mode is ScreenMode.LANDING


@pytest.mark.asyncio
async def test_stop_releases_every_subscription():
    orchestrator, signals, _viewport, _weather = _make()

    await orchestrator.start()
    assert signals.resize.subscriber_count == 1
    await orchestrator.stop()
    await orchestrator.stop()

    assert signals.resize.subscriber_count == 0
    assert signals.orientation_change.subscriber_count == 0
    assert signals.close_presenter.subscriber_count == 0
    assert signals.geolocation_updates.subscriber_count == 0
    assert orchestrator.running is False


@pytest.mark.asyncio
async def test_restart_after_stop_is_rejected():
    orchestrator, *_ = _make()
    await orchestrator.start()
    await orchestrator.stop()

    with pytest.raises(RuntimeError):
        await orchestrator.start()


@pytest.mark.asyncio
async def test_postal_submit_updates_location_and_closes_prompt():
    orchestrator, *_ = _make()

    async with orchestrator:
        await orchestrator.wait_idle()
        orchestrator.open_postal_prompt()
        task = orchestrator.submit_postal_code(" 94103 ")
        await task

        snap = orchestrator.snapshot
        assert snap.location == "San Francisco, CA"
        assert snap.coordinates == Coordinates(37.7725, -122.4091)
        assert snap.postal_prompt_open is False


@pytest.mark.asyncio
async def test_blank_postal_submit_does_nothing():
    orchestrator, _signals, _viewport, weather = _make()

    async with orchestrator:
        await orchestrator.wait_idle()
        assert orchestrator.submit_postal_code("   ") is None
        assert len(weather.calls) == 1


@pytest.mark.asyncio
async def test_failed_postal_keeps_prompt_and_weather():
    orchestrator, _signals, _viewport, weather = _make()

    async with orchestrator:
        await orchestrator.wait_idle()
        before = orchestrator.snapshot.weather_data
        orchestrator.open_postal_prompt()
        weather.fail_next.append(ApiServerError("down", status=500))
        await orchestrator.submit_postal_code("10001")

        snap = orchestrator.snapshot
        assert snap.error == "Weather service error, try again."
        assert snap.postal_prompt_open is True
        assert snap.weather_data is before


@pytest.mark.asyncio
async def test_map_point_and_geolocation_updates_fetch():
    orchestrator, signals, _viewport, weather = _make()

    async with orchestrator:
        await orchestrator.wait_idle()
        await orchestrator.select_map_point(-33.8688, 151.2093)
        signals.geolocation_updates.emit({"latitude": 41.8858, "longitude": -87.6181})
        signals.geolocation_updates.emit("nonsense")
        await orchestrator.wait_idle()

    assert weather.calls[1:] == [
        ("coords", (-33.8688, 151.2093)),
        ("coords", (41.8858, -87.6181)),
    ]
    assert orchestrator.snapshot.location == "Chicago, IL"


@pytest.mark.asyncio
async def test_latest_map_click_wins_over_slow_earlier_one():
    orchestrator, *_ = _make(weather=WeatherMock(delay_s=0.01))

    async with orchestrator:
        await orchestrator.wait_idle()
        orchestrator.select_map_point(40.75, -74.0)
        orchestrator.select_map_point(41.88, -87.62)
        await orchestrator.wait_idle()

        assert orchestrator.snapshot.location == "Chicago, IL"
        assert orchestrator.snapshot.loading is False


@pytest.mark.asyncio
async def test_stop_cancels_in_flight_fetch():
    orchestrator, *_ = _make(weather=WeatherMock(delay_s=10))

    await orchestrator.start()
    await asyncio.sleep(0)
    assert orchestrator.snapshot.loading is True
    await orchestrator.stop()

    assert orchestrator.snapshot.weather_data is None
    assert orchestrator.snapshot.loading is False
    assert orchestrator.select_map_point(1.0, 2.0) is None


@pytest.mark.asyncio
async def test_layers_through_entry_points():
    orchestrator, *_ = _make()

    async with orchestrator:
        orchestrator.swipe_layer("left")
        assert orchestrator.snapshot.current_layer is Layer.PRECIPITATION
        orchestrator.select_layer("forecast")
        orchestrator.swipe_layer("left")
        assert orchestrator.snapshot.current_layer is Layer.FORECAST


@pytest.mark.asyncio
async def test_subscribers_see_every_change():
    orchestrator, *_ = _make()
    seen = []
    remove = orchestrator.subscribe(seen.append)

    async with orchestrator:
        await orchestrator.wait_idle()
    remove()

    assert [state.loading for state in seen] == [True, False]
