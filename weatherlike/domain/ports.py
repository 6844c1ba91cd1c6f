from __future__ import annotations
from typing import Callable, Optional, Protocol, Tuple

from .entities import Coordinates, WeatherPayload


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class WeatherPort(Protocol):
    """Weather provider returning normalized payloads. Both calls may raise."""

    async def get_by_coordinates(self, lat: float, lon: float) -> WeatherPayload: ...
    async def get_by_postal_code(self, code: str) -> WeatherPayload: ...


class GeolocationPort(Protocol):
    """One-shot device position query.

    Raises ``GeolocationError`` on denial or failure.
    """

    async def current_position(self) -> Coordinates: ...


class ViewportPort(Protocol):
    """Read access to the current viewport size in CSS pixels."""

    def viewport_size(self) -> Tuple[int, int]: ...  # (width, height)


class Subscription(Protocol):
    """Handle returned by a signal source; releasing twice is harmless."""

    def unsubscribe(self) -> None: ...


class SignalSource(Protocol):
    """Event source (window resize, orientation change, custom events).

    Callbacks receive the event payload, or ``None`` for payload-less events.
    """

    def subscribe(self, callback: Callable[[Optional[object]], None]) -> Subscription: ...


class AmbientEffectPort(Protocol):
    """Optional decorative effect behind the landing screen."""

    def start(self) -> None: ...
    def stop(self) -> None: ...


class StoragePort(Protocol):
    """Persistence for user preferences."""

    def save_user_prefs(self, prefs: dict) -> None: ...
    def load_user_prefs(self) -> dict: ...
