"""Single source of truth for what the shell currently shows.

Call context:
    ``weatherlike.app.orchestrator.Orchestrator`` owns one ``ViewStateVM`` per
    session. Use cases and the display/layer view models mutate it through
    the transition methods below; the rendering layer only reads
    :attr:`ViewStateVM.snapshot` and listens for changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from ..domain.entities import Coordinates, Layer, ScreenMode, WeatherPayload

Listener = Callable[["ViewState"], None]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot handed to the rendering layer."""

    coordinates: Coordinates
    weather_data: Optional[WeatherPayload] = None
    loading: bool = False
    error: Optional[str] = None
    location: str = ""
    current_layer: Layer = Layer.PRIMARY_IMAGERY
    screen_mode: ScreenMode = ScreenMode.LANDING
    postal_prompt_open: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-friendly projection for logging and debugging views."""
        return {
            "coordinates": list(self.coordinates.as_tuple()),
            "has_weather": self.weather_data is not None,
            "loading": self.loading,
            "error": self.error,
            "location": self.location,
            "current_layer": self.current_layer.value,
            "screen_mode": self.screen_mode.value,
            "postal_prompt_open": self.postal_prompt_open,
        }


class ViewStateVM:
    """Holds the session ``ViewState`` and notifies listeners on every change."""

    def __init__(self, coordinates: Coordinates, *, on_change: Optional[Listener] = None) -> None:
        self._state = ViewState(coordinates=coordinates)
        self._listeners: List[Listener] = []
        if on_change is not None:
            self._listeners.append(on_change)

    @property
    def snapshot(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def set_coordinates(self, coordinates: Coordinates) -> None:
        self._commit(coordinates=coordinates)

    def begin_fetch(self) -> None:
        self._commit(loading=True, error=None)

    def complete_fetch(self, payload: WeatherPayload, *, close_postal_prompt: bool = False) -> None:
        changes: Dict[str, Any] = {
            "weather_data": payload,
            "location": payload.location.name,
            "coordinates": payload.location.coordinates,
            "loading": False,
            "error": None,
        }
        if close_postal_prompt:
            changes["postal_prompt_open"] = False
        self._commit(**changes)

    def fail_fetch(self, message: str) -> None:
        # Previous weather_data/location stay visible.
        self._commit(loading=False, error=message)

    def abort_fetch(self) -> None:
        """Drop the loading flag for fetches cancelled before they settled."""
        self._commit(loading=False)

    def set_layer(self, layer: Layer) -> None:
        self._commit(current_layer=layer)

    def set_screen_mode(self, mode: ScreenMode) -> None:
        self._commit(screen_mode=mode)

    def set_postal_prompt(self, open_: bool) -> None:
        self._commit(postal_prompt_open=bool(open_))

    # ------------------------------------------------------------------
    def _commit(self, **changes: Any) -> None:
        updated = replace(self._state, **changes)
        if updated == self._state:
            return
        self._state = updated
        for listener in list(self._listeners):
            if self._state is not updated:
                # A nested commit already delivered a newer state.
                return
            try:
                listener(updated)
            except Exception:
                log.exception("ViewState listener failed")


__all__ = ["Listener", "ViewState", "ViewStateVM"]
