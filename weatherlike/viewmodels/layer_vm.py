from __future__ import annotations

from typing import Union

from ..domain.entities import Layer
from ..domain.layers import LAYER_SEQUENCE, SwipeDirection, coerce_layer, step_layer
from .view_state_vm import ViewStateVM


class LayerVM:
    """Layer picker state: swipe stepping and direct selection."""

    layers = LAYER_SEQUENCE

    def __init__(self, state: ViewStateVM) -> None:
        self._state = state

    @property
    def current(self) -> Layer:
        return self._state.snapshot.current_layer

    def swipe(self, direction: SwipeDirection) -> Layer:
        target = step_layer(self.current, direction)
        self._state.set_layer(target)
        return target

    def select(self, layer: Union[Layer, str]) -> Layer:
        target = coerce_layer(layer)
        self._state.set_layer(target)
        return target
