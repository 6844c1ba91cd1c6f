from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Tuple


@dataclass(frozen=True)
class Coordinates:
    """Geographic point in decimal degrees."""

    lat: float
    """Latitude in the closed range [-90, 90]."""
    lon: float
    """Longitude in the closed range [-180, 180]."""

    def __post_init__(self) -> None:
        for label, value, bound in (("lat", self.lat, 90.0), ("lon", self.lon, 180.0)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Coordinates.{label} must be a number.")
            if not math.isfinite(value):
                raise ValueError(f"Coordinates.{label} must be finite.")
            if abs(value) > bound:
                raise ValueError(f"Coordinates.{label} must be within +/-{bound:g}.")
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lon", float(self.lon))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)

    def label(self) -> str:
        """Short human readable form, e.g. ``40.71°N, 74.01°W``."""
        ns = "N" if self.lat >= 0 else "S"
        ew = "E" if self.lon >= 0 else "W"
        return f"{abs(self.lat):.2f}°{ns}, {abs(self.lon):.2f}°{ew}"


@dataclass(frozen=True)
class LocationInfo:
    """Resolved place returned by a weather provider."""

    name: str
    """Display name of the place (city, region, country)."""
    coordinates: Coordinates
    """Point the provider actually reported data for."""


@dataclass(frozen=True)
class CurrentConditions:
    """Observed conditions at fetch time. Fields are ``None`` when not reported."""

    temperature_c: Optional[float] = None
    precipitation_mm: Optional[float] = None
    cloud_cover_pct: Optional[int] = None
    weather_code: Optional[int] = None
    wind_speed_kmh: Optional[float] = None


@dataclass(frozen=True)
class HourlyPoint:
    """One hour of forecast data."""

    time: datetime
    temperature_c: Optional[float] = None
    precipitation_probability: Optional[int] = None
    weather_code: Optional[int] = None


@dataclass(frozen=True)
class WeatherPayload:
    """Normalized provider result consumed by the view layer."""

    location: LocationInfo
    """Place name and the provider-reported coordinate."""
    current: CurrentConditions = CurrentConditions()
    """Current conditions for the precipitation layer and presenter view."""
    hourly: Tuple[HourlyPoint, ...] = ()
    """Hourly forecast for the forecast layer, oldest first."""


class Layer(str, Enum):
    """Selectable map data layers in their fixed display order."""

    PRIMARY_IMAGERY = "satellite"
    PRECIPITATION = "rain"
    FORECAST = "forecast"


class ScreenMode(str, Enum):
    """Top-level screens the shell can show."""

    LANDING = "landing"
    PRESENTER = "presenter"
    MAIN = "main"


RequestKind = Literal["coords", "postal"]


@dataclass(frozen=True)
class FetchRequest:
    """Transient description of one weather lookup.

    Exactly one of ``coordinates`` (kind ``coords``) or ``code`` (kind
    ``postal``) is set.
    """

    kind: RequestKind
    coordinates: Optional[Coordinates] = None
    code: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == "coords":
            if self.coordinates is None or self.code is not None:
                raise ValueError("Coordinate requests carry coordinates only.")
        elif self.kind == "postal":
            if self.coordinates is not None or not (self.code or "").strip():
                raise ValueError("Postal requests carry a non-empty code only.")
        else:
            raise ValueError(f"Unknown request kind: {self.kind!r}")

    @classmethod
    def for_coordinates(cls, coordinates: Coordinates) -> "FetchRequest":
        return cls(kind="coords", coordinates=coordinates)

    @classmethod
    def for_postal_code(cls, code: str) -> "FetchRequest":
        return cls(kind="postal", code=code.strip())

    def describe(self) -> str:
        if self.coordinates is not None:
            return f"coords {self.coordinates.lat:.4f},{self.coordinates.lon:.4f}"
        return f"postal {self.code}"


@dataclass(frozen=True)
class DeviceCondition:
    """Viewport facts used to decide presenter eligibility. Computed, never stored."""

    width: int
    height: int
    mobile_breakpoint_px: int = 768

    @property
    def is_landscape(self) -> bool:
        return self.height < self.width

    @property
    def is_mobile_width(self) -> bool:
        return self.width <= self.mobile_breakpoint_px

    @property
    def presenter_eligible(self) -> bool:
        return self.is_landscape and self.is_mobile_width


__all__ = [
    "Coordinates",
    "CurrentConditions",
    "DeviceCondition",
    "FetchRequest",
    "HourlyPoint",
    "Layer",
    "LocationInfo",
    "RequestKind",
    "ScreenMode",
    "WeatherPayload",
]
