"""Adapter and use-case wiring for the shell runtime.

This module owns lazy construction of the weather provider adapter from
values in :class:`weatherlike.viewmodels.settings_vm.SettingsVM`.
``weatherlike.app.main`` builds it before a session starts.
"""

from __future__ import annotations

from typing import Optional

from ..adapters.weather_mock import WeatherMock
from ..adapters.weather_rest import WeatherRestAdapter
from ..domain.ports import WeatherPort
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache the runtime weather adapter from settings state."""

    def __init__(self, settings_vm: SettingsVM) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings state containing provider choice, URLs and
                timeout preferences used to build the adapter.
        """
        self.settings_vm = settings_vm
        self._weather_adapter: Optional[WeatherPort] = None

    @property
    def weather_adapter(self) -> Optional[WeatherPort]:
        """Return the cached provider adapter, if built."""
        return self._weather_adapter

    def reset(self) -> None:
        """Drop the cached adapter so the next ``ensure_ready`` rebuilds it."""
        adapter = self._weather_adapter
        self._weather_adapter = None
        if isinstance(adapter, WeatherRestAdapter):
            adapter.close()

    def ensure_ready(self) -> bool:
        """Ensure the provider adapter exists.

        Returns:
            ``True`` when an adapter is available, ``False`` when the settings
            are invalid or lack a forecast URL for the REST provider.
        """
        if self._weather_adapter is not None:
            return True
        if not self.settings_vm.is_valid():
            return False

        cfg = self.settings_vm.config
        if cfg.provider == "mock":
            self._weather_adapter = WeatherMock()
            return True
        if not cfg.forecast_url:
            return False
        self._weather_adapter = WeatherRestAdapter(
            forecast_url=cfg.forecast_url,
            reverse_geocode_url=cfg.reverse_geocode_url,
            postal_lookup_url=cfg.postal_lookup_url,
            postal_country=cfg.postal_country,
            request_timeout_s=cfg.request_timeout_s,
            retries=cfg.retries,
        )
        return True
