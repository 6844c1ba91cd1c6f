"""Ordered data layers and the swipe stepping rule.

Swiping ``left`` advances towards the end of :data:`LAYER_SEQUENCE`, swiping
``right`` moves back. Both ends clamp.
"""

from __future__ import annotations

from typing import Literal, Tuple, Union

from .entities import Layer

SwipeDirection = Literal["left", "right"]

LAYER_SEQUENCE: Tuple[Layer, ...] = (
    Layer.PRIMARY_IMAGERY,
    Layer.PRECIPITATION,
    Layer.FORECAST,
)

_STEP = {"left": 1, "right": -1}


def coerce_layer(value: Union[Layer, str]) -> Layer:
    """Return the ``Layer`` for an enum member, its value, or its name."""
    if isinstance(value, Layer):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return Layer(text.lower())
        except ValueError:
            pass
        member = Layer.__members__.get(text.upper().replace("-", "_"))
        if member is not None:
            return member
    raise ValueError(f"Unknown layer: {value!r}")


def step_layer(current: Layer, direction: SwipeDirection) -> Layer:
    """Move one step through the sequence; stepping past either end is a no-op."""
    try:
        step = _STEP[direction]
    except KeyError:
        raise ValueError(f"Unknown swipe direction: {direction!r}") from None
    index = LAYER_SEQUENCE.index(current) + step
    if index < 0 or index >= len(LAYER_SEQUENCE):
        return current
    return LAYER_SEQUENCE[index]


__all__ = ["LAYER_SEQUENCE", "SwipeDirection", "coerce_layer", "step_layer"]
