"""REST weather provider built on Open-Meteo and Zippopotam.

Coordinate lookups hit the Open-Meteo forecast endpoint and, for the display
name, its reverse geocoder. Postal codes are resolved to a place and a
coordinate through Zippopotam first, then looked up like coordinates.

The HTTP work is blocking (``requests``); the async port methods push it onto
a worker thread with ``asyncio.to_thread`` so the event loop stays free.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

from weatherlike.domain.entities import (
    Coordinates,
    CurrentConditions,
    HourlyPoint,
    LocationInfo,
    WeatherPayload,
)
from weatherlike.domain.ports import WeatherPort

from .api_errors import ApiClientError, ApiError, raise_for_status
from .http_client import HttpConfig, RetryingSession

DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_REVERSE_GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/reverse"
DEFAULT_POSTAL_LOOKUP_URL = "https://api.zippopotam.us"

_CURRENT_FIELDS = "temperature_2m,precipitation,cloud_cover,weather_code,wind_speed_10m"
_HOURLY_FIELDS = "temperature_2m,precipitation_probability,weather_code"

log = logging.getLogger(__name__)


class WeatherRestAdapter(WeatherPort):
    """Weather provider adapter returning normalized ``WeatherPayload`` objects."""

    def __init__(
        self,
        *,
        forecast_url: str = DEFAULT_FORECAST_URL,
        reverse_geocode_url: str = DEFAULT_REVERSE_GEOCODE_URL,
        postal_lookup_url: str = DEFAULT_POSTAL_LOOKUP_URL,
        postal_country: str = "us",
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not forecast_url:
            raise ValueError("WeatherRestAdapter requires a forecast URL")
        self.forecast_url = forecast_url
        self.reverse_geocode_url = reverse_geocode_url
        self.postal_lookup_url = postal_lookup_url.rstrip("/")
        self.postal_country = (postal_country or "us").strip().lower()
        self.http = RetryingSession(
            HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        )

    # ---- WeatherPort ----
    async def get_by_coordinates(self, lat: float, lon: float) -> WeatherPayload:
        return await asyncio.to_thread(self.fetch_by_coordinates, lat, lon)

    async def get_by_postal_code(self, code: str) -> WeatherPayload:
        return await asyncio.to_thread(self.fetch_by_postal_code, code)

    # ---- Blocking implementations ----
    def fetch_by_coordinates(
        self, lat: float, lon: float, *, name: Optional[str] = None
    ) -> WeatherPayload:
        try:
            requested = Coordinates(lat, lon)
        except ValueError as exc:
            raise ApiClientError(str(exc), status=400, context="Forecast") from exc

        raw = self._get_json(
            self.forecast_url,
            params={
                "latitude": requested.lat,
                "longitude": requested.lon,
                "current": _CURRENT_FIELDS,
                "hourly": _HOURLY_FIELDS,
                "forecast_days": 1,
                "timezone": "auto",
            },
            ctx="Forecast",
        )
        place = name or self._reverse_name(requested)
        return normalize_forecast(raw, name=place, requested=requested)

    def fetch_by_postal_code(self, code: str) -> WeatherPayload:
        cleaned = (code or "").strip()
        if not cleaned:
            raise ApiClientError("Postal code must not be empty", status=400, context="Postal lookup")

        url = f"{self.postal_lookup_url}/{quote(self.postal_country)}/{quote(cleaned)}"
        resp = self.http.get(url)
        if resp.status_code == 404:
            raise ApiClientError(
                f"Unknown postal code: {cleaned}",
                status=404,
                context="Postal lookup",
            )
        raise_for_status(resp, "Postal lookup")
        name, coords = parse_postal_place(_json_or_error(resp, "Postal lookup"), cleaned)
        return self.fetch_by_coordinates(coords.lat, coords.lon, name=name)

    def close(self) -> None:
        self.http.close()

    # ------------------------------------------------------------------
    def _get_json(self, url: str, *, params: Dict[str, Any], ctx: str) -> Any:
        resp = self.http.get(url, params=params)
        raise_for_status(resp, ctx)
        return _json_or_error(resp, ctx)

    def _reverse_name(self, coords: Coordinates) -> str:
        """Resolve a display name; falls back to the formatted coordinate."""
        if not self.reverse_geocode_url:
            return coords.label()
        try:
            data = self._get_json(
                self.reverse_geocode_url,
                params={
                    "latitude": coords.lat,
                    "longitude": coords.lon,
                    "count": 1,
                    "language": "en",
                },
                ctx="Reverse geocode",
            )
        except ApiError as exc:
            log.debug("Reverse geocode unavailable for %s: %s", coords.label(), exc)
            return coords.label()
        return parse_reverse_name(data) or coords.label()


def _json_or_error(resp: Any, ctx: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise ApiError(f"{ctx}: invalid JSON response", context=ctx) from exc


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return None if number is None else int(round(number))


def _column(hourly: Mapping[str, Any], key: str) -> List[Any]:
    values = hourly.get(key)
    return list(values) if isinstance(values, list) else []


def normalize_forecast(raw: Any, *, name: str, requested: Coordinates) -> WeatherPayload:
    """Map an Open-Meteo forecast response onto ``WeatherPayload``.

    The provider snaps requests to its grid; the reported point wins when it
    is valid, otherwise the requested point is kept.
    """
    if not isinstance(raw, Mapping):
        raise ApiError("Forecast: unexpected payload shape", payload=raw, context="Forecast")

    try:
        reported = Coordinates(float(raw["latitude"]), float(raw["longitude"]))
    except (KeyError, TypeError, ValueError):
        reported = requested

    current_raw = raw.get("current") if isinstance(raw.get("current"), Mapping) else {}
    current = CurrentConditions(
        temperature_c=_as_float(current_raw.get("temperature_2m")),
        precipitation_mm=_as_float(current_raw.get("precipitation")),
        cloud_cover_pct=_as_int(current_raw.get("cloud_cover")),
        weather_code=_as_int(current_raw.get("weather_code")),
        wind_speed_kmh=_as_float(current_raw.get("wind_speed_10m")),
    )

    hourly_raw = raw.get("hourly") if isinstance(raw.get("hourly"), Mapping) else {}
    temps = _column(hourly_raw, "temperature_2m")
    pops = _column(hourly_raw, "precipitation_probability")
    codes = _column(hourly_raw, "weather_code")
    points: List[HourlyPoint] = []
    for idx, stamp in enumerate(_column(hourly_raw, "time")):
        try:
            when = datetime.fromisoformat(str(stamp))
        except ValueError:
            continue
        points.append(
            HourlyPoint(
                time=when,
                temperature_c=_as_float(temps[idx]) if idx < len(temps) else None,
                precipitation_probability=_as_int(pops[idx]) if idx < len(pops) else None,
                weather_code=_as_int(codes[idx]) if idx < len(codes) else None,
            )
        )

    return WeatherPayload(
        location=LocationInfo(name=name, coordinates=reported),
        current=current,
        hourly=tuple(points),
    )


def parse_reverse_name(data: Any) -> Optional[str]:
    if not isinstance(data, Mapping):
        return None
    results = data.get("results")
    if not isinstance(results, list) or not results or not isinstance(results[0], Mapping):
        return None
    first = results[0]
    parts = [str(first.get(key) or "").strip() for key in ("name", "admin1", "country")]
    label = ", ".join(part for part in parts if part)
    return label or None


def parse_postal_place(payload: Any, code: str) -> Tuple[str, Coordinates]:
    """Return ``(display name, coordinate)`` from a Zippopotam response."""
    places = payload.get("places") if isinstance(payload, Mapping) else None
    if not isinstance(places, list) or not places or not isinstance(places[0], Mapping):
        raise ApiClientError(f"Unknown postal code: {code}", status=404, payload=payload)
    place = places[0]
    try:
        coords = Coordinates(float(place["latitude"]), float(place["longitude"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ApiError(
            f"Postal lookup: malformed place for {code}", payload=payload, context="Postal lookup"
        ) from exc
    town = str(place.get("place name") or "").strip()
    region = str(place.get("state abbreviation") or place.get("state") or "").strip()
    name = ", ".join(part for part in (town, region) if part) or code
    return name, coords


__all__ = [
    "DEFAULT_FORECAST_URL",
    "DEFAULT_POSTAL_LOOKUP_URL",
    "DEFAULT_REVERSE_GEOCODE_URL",
    "WeatherRestAdapter",
    "normalize_forecast",
    "parse_postal_place",
    "parse_reverse_name",
]
