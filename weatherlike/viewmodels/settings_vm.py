"""Runtime settings for the shell: fallback point, breakpoint, provider wiring.

``SettingsVM`` validates flat mappings loaded from ``user_prefs.json`` (see
``weatherlike.adapters.storage_local``) and hands typed ``SettingsConfig``
values to ``AppController`` and the orchestrator. It performs no I/O.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..adapters.weather_rest import (
    DEFAULT_FORECAST_URL,
    DEFAULT_POSTAL_LOOKUP_URL,
    DEFAULT_REVERSE_GEOCODE_URL,
)
from ..domain.entities import Coordinates
from ..utils.logging import env_requests_debug

PROVIDERS: Tuple[str, ...] = ("rest", "mock")


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    fallback_lat: float = 40.7128
    fallback_lon: float = -74.0060
    mobile_breakpoint_px: int = 768
    request_timeout_s: int = 10
    retries: int = 2
    provider: str = "rest"
    forecast_url: str = DEFAULT_FORECAST_URL
    reverse_geocode_url: str = DEFAULT_REVERSE_GEOCODE_URL
    postal_lookup_url: str = DEFAULT_POSTAL_LOOKUP_URL
    postal_country: str = "us"

    @property
    def fallback_coordinates(self) -> Coordinates:
        return Coordinates(self.fallback_lat, self.fallback_lon)


# ---- value coercion -------------------------------------------------------
def to_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number.") from exc
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite.")
    return number


def to_int(name: str, value: Any, *, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be an integer.")
    try:
        number = int(value.strip()) if isinstance(value, str) else int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if minimum is not None and number < minimum:
        raise ValueError(f"{name} must be >= {minimum}.")
    return number


def to_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def to_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def to_provider(value: Any) -> str:
    name = to_text(value).lower()
    if name not in PROVIDERS:
        raise ValueError(f"provider must be one of: {', '.join(PROVIDERS)}.")
    return name


_FIELD_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    "fallback_lat": to_float,
    "fallback_lon": to_float,
    "mobile_breakpoint_px": lambda name, v: to_int(name, v, minimum=0),
    "request_timeout_s": lambda name, v: to_int(name, v, minimum=1),
    "retries": lambda name, v: to_int(name, v, minimum=0),
    "provider": lambda _name, v: to_provider(v),
    "forecast_url": lambda _name, v: to_text(v),
    "reverse_geocode_url": lambda _name, v: to_text(v),
    "postal_lookup_url": lambda _name, v: to_text(v),
    "postal_country": lambda _name, v: to_text(v),
}


def _checked_fallback(cfg: SettingsConfig) -> Coordinates:
    """Validate latitude and longitude together; raises ValueError when out of range."""
    return cfg.fallback_coordinates


CONFIG_KEYS = tuple(f.name for f in fields(SettingsConfig))
SETTINGS_KEYS = CONFIG_KEYS + ("debug_logging",)


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = env_requests_debug()

    @property
    def provider(self) -> str:
        return self.config.provider

    @provider.setter
    def provider(self, value: str) -> None:
        self.apply_dict({"provider": value})

    def is_valid(self) -> bool:
        cfg = self.config
        try:
            _checked_fallback(cfg)
        except ValueError:
            return False
        return cfg.request_timeout_s > 0 and cfg.retries >= 0 and cfg.provider in PROVIDERS

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Validate and apply a flat settings mapping; nothing changes on error."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        unknown = sorted(str(key) for key in payload if key not in SETTINGS_KEYS)
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")

        updates = {key: _FIELD_COERCERS[key](key, payload[key]) for key in CONFIG_KEYS if key in payload}
        candidate = replace(self.config, **updates)
        _checked_fallback(candidate)
        self.config = candidate
        if "debug_logging" in payload:
            self.debug_logging = to_flag(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging = to_flag(enabled)

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())
