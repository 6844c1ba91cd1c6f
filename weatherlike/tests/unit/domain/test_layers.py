from __future__ import annotations

import pytest

from weatherlike.domain.entities import Layer
from weatherlike.domain.layers import LAYER_SEQUENCE, coerce_layer, step_layer


def test_sequence_order_is_fixed():
    assert LAYER_SEQUENCE == (Layer.PRIMARY_IMAGERY, Layer.PRECIPITATION, Layer.FORECAST)


def test_left_advances_and_right_goes_back():
    assert step_layer(Layer.PRIMARY_IMAGERY, "left") is Layer.PRECIPITATION
    assert step_layer(Layer.PRECIPITATION, "left") is Layer.FORECAST
    assert step_layer(Layer.FORECAST, "right") is Layer.PRECIPITATION
    assert step_layer(Layer.PRECIPITATION, "right") is Layer.PRIMARY_IMAGERY


def test_ends_clamp_instead_of_wrapping():
    assert step_layer(Layer.PRIMARY_IMAGERY, "right") is Layer.PRIMARY_IMAGERY
    assert step_layer(Layer.FORECAST, "left") is Layer.FORECAST


def test_unknown_direction_raises():
    with pytest.raises(ValueError):
        step_layer(Layer.PRIMARY_IMAGERY, "up")


@pytest.mark.parametrize(
    "raw, expected",
    [
        (Layer.FORECAST, Layer.FORECAST),
        ("rain", Layer.PRECIPITATION),
        (" Satellite ", Layer.PRIMARY_IMAGERY),
        ("primary-imagery", Layer.PRIMARY_IMAGERY),
        ("PRECIPITATION", Layer.PRECIPITATION),
    ],
)
def test_coerce_layer_accepts_values_and_names(raw, expected):
    assert coerce_layer(raw) is expected


def test_coerce_layer_rejects_unknown():
    with pytest.raises(ValueError):
        coerce_layer("radar")
    with pytest.raises(ValueError):
        coerce_layer(3)  # type: ignore[arg-type]
