"""Session root: wires device signals, view models and use cases together.

The rendering layer gets a read-only :class:`ViewState` snapshot (plus change
notifications) and a handful of entry points. Everything runs on one asyncio
event loop; fetches are tasks owned by the session and cancelled at teardown.

Call chain:
    host/UI event -> ``Orchestrator`` entry point -> ``ResolveLocation`` /
    ``DisplayModeVM`` / ``LayerVM`` -> ``FetchWeather`` -> ``ViewStateVM``
    -> listeners.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Optional, Set, Union

from ..adapters.signals import DeviceSignals
from ..domain.entities import Coordinates, Layer, ScreenMode, WeatherPayload
from ..domain.layers import SwipeDirection
from ..domain.ports import AmbientEffectPort, GeolocationPort, ViewportPort, WeatherPort
from ..usecases.fetch_weather import FetchWeather
from ..usecases.resolve_location import ResolveLocation
from ..viewmodels.display_mode_vm import DisplayModeVM
from ..viewmodels.landing_vm import LandingVM
from ..viewmodels.layer_vm import LayerVM
from ..viewmodels.settings_vm import SettingsConfig
from ..viewmodels.view_state_vm import Listener, ViewState, ViewStateVM
from .subscriptions import SubscriptionRegistry


log = logging.getLogger(__name__)


class Orchestrator:
    """Owns one session's ``ViewState`` and every transition applied to it."""

    def __init__(
        self,
        *,
        weather_port: WeatherPort,
        viewport: ViewportPort,
        signals: Optional[DeviceSignals] = None,
        geolocation: Optional[GeolocationPort] = None,
        settings: Optional[SettingsConfig] = None,
        effect: Optional[AmbientEffectPort] = None,
        on_change: Optional[Listener] = None,
    ) -> None:
        cfg = settings or SettingsConfig()
        fallback = cfg.fallback_coordinates

        # ---- ViewModels ----
        self.state = ViewStateVM(fallback, on_change=on_change)
        self.display = DisplayModeVM(
            self.state, viewport, mobile_breakpoint_px=cfg.mobile_breakpoint_px
        )
        self.layers = LayerVM(self.state)
        self.landing = LandingVM(effect=effect)

        # ---- UseCases ----
        self.uc_fetch = FetchWeather(weather_port, self.state)
        self.uc_resolve = ResolveLocation(self.uc_fetch, self.state, fallback)

        self._signals = signals
        self._geolocation = geolocation
        self._subscriptions = SubscriptionRegistry()
        self._tasks: Set[asyncio.Task] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._running = False
        self._ended = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def snapshot(self) -> ViewState:
        return self.state.snapshot

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Push-on-change hook for the rendering layer; returns an unsubscribe callable."""
        return self.state.subscribe(listener)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    async def start(self) -> None:
        if self._running:
            log.warning("Session is already running")
            return
        if self._ended:
            raise RuntimeError("Session has ended; create a new Orchestrator.")

        self._loop = asyncio.get_running_loop()
        self._running = True
        self._subscribe_signals()
        self.display.recheck()
        self.landing.start()
        self._spawn(self.uc_resolve.from_device(self._geolocation))
        log.info("Session started (%d signal subscriptions)", len(self._subscriptions))

    async def stop(self) -> None:
        """Release subscriptions and in-flight work. Safe to call more than once."""
        if not self._running:
            return
        self._running = False
        self._ended = True
        try:
            self._subscriptions.release_all()
            self.landing.stop()
        finally:
            pending = [task for task in self._tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
                self.state.abort_fetch()
            self._tasks.clear()
        log.info("Session stopped")

    async def __aenter__(self) -> "Orchestrator":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    async def wait_idle(self) -> None:
        """Wait until no fetch started by this session is still running."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Entry points for the rendering layer
    # ------------------------------------------------------------------
    def submit_postal_code(self, code: Optional[str]) -> Optional[asyncio.Task]:
        if ResolveLocation.postal_request(code) is None:
            log.debug("Ignoring blank postal code")
            return None
        return self._spawn(self.uc_resolve.from_postal_code(code))

    def select_map_point(self, lat: float, lon: float) -> Optional[asyncio.Task]:
        return self._spawn(self.uc_resolve.from_coordinates(lat, lon))

    def swipe_layer(self, direction: SwipeDirection) -> Layer:
        return self.layers.swipe(direction)

    def select_layer(self, layer: Union[Layer, str]) -> Layer:
        return self.layers.select(layer)

    def enter_app(self) -> ScreenMode:
        self.landing.stop()
        return self.display.enter_app()

    def close_presenter(self) -> ScreenMode:
        return self.display.close_presenter()

    def open_postal_prompt(self) -> None:
        self.state.set_postal_prompt(True)

    def close_postal_prompt(self) -> None:
        self.state.set_postal_prompt(False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _subscribe_signals(self) -> None:
        signals = self._signals
        if signals is None:
            return
        self._subscriptions.add("resize", signals.resize.subscribe(self.display.recheck))
        self._subscriptions.add(
            "orientationchange", signals.orientation_change.subscribe(self.display.recheck)
        )
        self._subscriptions.add(
            "close-presenter", signals.close_presenter.subscribe(self.display.close_presenter)
        )
        if signals.geolocation_updates is not None:
            self._subscriptions.add(
                "geolocation-update",
                signals.geolocation_updates.subscribe(self._on_geolocation_update),
            )

    def _on_geolocation_update(self, payload: Optional[object]) -> None:
        point = _coerce_point(payload)
        if point is None:
            log.warning("Ignoring malformed geolocation update: %r", payload)
            return
        self._spawn(self.uc_resolve.from_coordinates(*point))

    def _spawn(self, coro: Awaitable[Optional[WeatherPayload]]) -> Optional[asyncio.Task]:
        if not self._running or self._loop is None:
            log.warning("Session not running; request ignored")
            # Close the coroutine so it is not reported as never awaited.
            close = getattr(coro, "close", None)
            if close is not None:
                close()
            return None
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


def _coerce_point(payload: Optional[object]) -> Optional[tuple]:
    if isinstance(payload, Coordinates):
        return payload.as_tuple()
    if isinstance(payload, Mapping):
        lat = payload.get("lat", payload.get("latitude"))
        lon = payload.get("lon", payload.get("longitude"))
        if lat is None or lon is None:
            return None
        return (lat, lon)
    if isinstance(payload, (tuple, list)) and len(payload) == 2:
        return (payload[0], payload[1])
    return None


__all__ = ["Orchestrator"]
