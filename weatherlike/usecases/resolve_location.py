from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from weatherlike.domain.entities import Coordinates, FetchRequest, WeatherPayload
from weatherlike.domain.ports import GeolocationPort
from weatherlike.viewmodels.view_state_vm import ViewStateVM

from .fetch_weather import FetchWeather

log = logging.getLogger(__name__)


@dataclass
class ResolveLocation:
    """Turn device positions, map clicks and postal codes into fetch requests.

    Coordinate sources move ``ViewState.coordinates`` right away so the map
    can follow the point; postal codes only move it once the provider answers.
    """

    fetch: FetchWeather
    state: ViewStateVM
    fallback: Coordinates

    async def from_device(self, geolocation: Optional[GeolocationPort]) -> Optional[WeatherPayload]:
        """Query the device once; denial or failure falls back silently."""
        coords = self.fallback
        if geolocation is None:
            log.info("Geolocation unavailable; using fallback %s", self.fallback.label())
        else:
            try:
                coords = await geolocation.current_position()
            except Exception as exc:
                log.warning("Location access denied: %s", exc)
                coords = self.fallback
        return await self._fetch_point(coords)

    async def from_coordinates(self, lat: float, lon: float) -> Optional[WeatherPayload]:
        """Map clicks and continuous position updates."""
        try:
            coords = Coordinates(lat, lon)
        except ValueError as exc:
            log.warning("Ignoring invalid point (%r, %r): %s", lat, lon, exc)
            return None
        return await self._fetch_point(coords)

    async def from_postal_code(self, raw_code: Optional[str]) -> Optional[WeatherPayload]:
        request = self.postal_request(raw_code)
        if request is None:
            return None
        return await self.fetch(request)

    @staticmethod
    def postal_request(raw_code: Optional[str]) -> Optional[FetchRequest]:
        """Build a postal request, or ``None`` for blank input."""
        code = (raw_code or "").strip()
        if not code:
            return None
        return FetchRequest.for_postal_code(code)

    async def _fetch_point(self, coords: Coordinates) -> Optional[WeatherPayload]:
        self.state.set_coordinates(coords)
        return await self.fetch(FetchRequest.for_coordinates(coords))
