"""In-process device and window signal sources.

These stand in for browser globals (``resize``, ``orientationchange``,
``geolocation``, custom window events). A host embedding the shell feeds
them from its own event loop; tests drive them directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from weatherlike.domain.entities import Coordinates
from weatherlike.domain.errors import GeolocationError
from weatherlike.domain.ports import GeolocationPort, SignalSource, Subscription, ViewportPort

Callback = Callable[[Optional[object]], None]

log = logging.getLogger(__name__)


class SignalSubscription(Subscription):
    """Handle bound to one callback of a :class:`SignalHub`."""

    def __init__(self, hub: "SignalHub", token: int) -> None:
        self._hub = hub
        self._token = token
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._hub._drop(self._token)


class SignalHub(SignalSource):
    """Named event source delivering payloads to subscribers in registration order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: Dict[int, Callback] = {}
        self._next_token = 0

    def subscribe(self, callback: Callback) -> SignalSubscription:
        self._next_token += 1
        self._callbacks[self._next_token] = callback
        return SignalSubscription(self, self._next_token)

    def emit(self, payload: Optional[object] = None) -> int:
        """Deliver ``payload`` to every subscriber; returns the delivery count.

        A failing subscriber is logged and does not stop delivery to the rest.
        """
        delivered = 0
        for callback in list(self._callbacks.values()):
            try:
                callback(payload)
            except Exception:
                log.exception("Subscriber of '%s' failed", self.name)
            delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _drop(self, token: int) -> None:
        self._callbacks.pop(token, None)


class StaticViewport(ViewportPort):
    """Mutable viewport size; ``resize`` updates it and emits on ``changes``."""

    def __init__(self, width: int = 1280, height: int = 800, *, changes: Optional[SignalHub] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self.changes = changes or SignalHub("resize")

    def viewport_size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.changes.emit(None)


@dataclass
class StaticGeolocation(GeolocationPort):
    """Geolocation source answering with a fixed position or a denial."""

    position: Optional[Coordinates] = None
    denied: bool = False
    queries: int = 0

    async def current_position(self) -> Coordinates:
        self.queries += 1
        if self.denied:
            raise GeolocationError("User denied Geolocation", denied=True)
        if self.position is None:
            raise GeolocationError("Position unavailable")
        return self.position


@dataclass
class DeviceSignals:
    """Bundle of the external signal sources the orchestrator subscribes to.

    ``geolocation_updates`` delivers :class:`Coordinates` (or ``(lat, lon)``
    tuples); the other sources carry no payload.
    """

    resize: SignalHub
    orientation_change: SignalHub
    close_presenter: SignalHub
    geolocation_updates: Optional[SignalHub] = None

    @classmethod
    def create(cls, *, with_geolocation_updates: bool = True) -> "DeviceSignals":
        return cls(
            resize=SignalHub("resize"),
            orientation_change=SignalHub("orientationchange"),
            close_presenter=SignalHub("close-presenter"),
            geolocation_updates=SignalHub("geolocation-update") if with_geolocation_updates else None,
        )


__all__ = [
    "DeviceSignals",
    "SignalHub",
    "SignalSubscription",
    "StaticGeolocation",
    "StaticViewport",
]
