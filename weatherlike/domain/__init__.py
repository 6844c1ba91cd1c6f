"""Domain layer: value objects, transition rules, and port protocols.

Nothing in this package performs I/O. Adapters implement the protocols in
``ports`` and use cases/view models consume them.
"""

from .entities import (
    Coordinates,
    CurrentConditions,
    DeviceCondition,
    FetchRequest,
    HourlyPoint,
    Layer,
    LocationInfo,
    ScreenMode,
    WeatherPayload,
)
from .errors import GeolocationError
from .layers import LAYER_SEQUENCE, coerce_layer, step_layer
from .ports import UseCaseError

__all__ = [
    "Coordinates",
    "CurrentConditions",
    "DeviceCondition",
    "FetchRequest",
    "GeolocationError",
    "HourlyPoint",
    "LAYER_SEQUENCE",
    "Layer",
    "LocationInfo",
    "ScreenMode",
    "UseCaseError",
    "WeatherPayload",
    "coerce_layer",
    "step_layer",
]
