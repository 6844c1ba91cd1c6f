from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from weatherlike.domain.entities import (
    Coordinates,
    CurrentConditions,
    HourlyPoint,
    LocationInfo,
    WeatherPayload,
)
from weatherlike.domain.ports import WeatherPort

from .api_errors import ApiClientError

Place = Tuple[str, float, float]

DEFAULT_PLACES: Dict[str, Place] = {
    "10001": ("New York, NY", 40.7484, -73.9967),
    "94103": ("San Francisco, CA", 37.7725, -122.4091),
    "60601": ("Chicago, IL", 41.8858, -87.6181),
}


@dataclass
class WeatherMock(WeatherPort):
    """Offline substitute for ``WeatherRestAdapter`` with deterministic payloads.

    ``fail_next`` queues exceptions raised by the next calls (FIFO) and
    ``delay_s`` simulates network latency.
    """

    places: Dict[str, Place] = field(default_factory=lambda: dict(DEFAULT_PLACES))
    delay_s: float = 0.0
    fail_next: List[Exception] = field(default_factory=list)
    calls: List[Tuple[str, object]] = field(default_factory=list)

    # ---------- WeatherPort ----------

    async def get_by_coordinates(self, lat: float, lon: float) -> WeatherPayload:
        self.calls.append(("coords", (lat, lon)))
        await self._simulate()
        try:
            coords = Coordinates(lat, lon)
        except ValueError as exc:
            raise ApiClientError(str(exc), status=400, context="Forecast") from exc
        return self._payload(self._name_for(coords), coords)

    async def get_by_postal_code(self, code: str) -> WeatherPayload:
        self.calls.append(("postal", code))
        await self._simulate()
        place = self.places.get((code or "").strip())
        if place is None:
            raise ApiClientError(f"Unknown postal code: {code}", status=404, context="Postal lookup")
        name, lat, lon = place
        return self._payload(name, Coordinates(lat, lon))

    # ---------- helpers ----------

    async def _simulate(self) -> None:
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        if self.fail_next:
            raise self.fail_next.pop(0)

    def _name_for(self, coords: Coordinates) -> str:
        for name, lat, lon in self.places.values():
            if abs(lat - coords.lat) < 0.05 and abs(lon - coords.lon) < 0.05:
                return name
        return coords.label()

    @staticmethod
    def _payload(name: str, coords: Coordinates, *, now: Optional[datetime] = None) -> WeatherPayload:
        start = (now or datetime.now()).replace(minute=0, second=0, microsecond=0)
        # Temperatures derived from latitude keep results stable between runs.
        base = round(25.0 - abs(coords.lat) * 0.3, 1)
        hourly = tuple(
            HourlyPoint(
                time=start + timedelta(hours=offset),
                temperature_c=round(base - offset * 0.2, 1),
                precipitation_probability=(offset * 7) % 100,
                weather_code=3 if offset % 4 else 61,
            )
            for offset in range(24)
        )
        return WeatherPayload(
            location=LocationInfo(name=name, coordinates=coords),
            current=CurrentConditions(
                temperature_c=base,
                precipitation_mm=0.0,
                cloud_cover_pct=40,
                weather_code=2,
                wind_speed_kmh=12.0,
            ),
            hourly=hourly,
        )
