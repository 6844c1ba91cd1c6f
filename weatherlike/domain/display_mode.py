"""Screen mode transition rules.

``LANDING`` is left only through :func:`enter_app`. Outside landing the mode
follows the device condition on every re-check, except that an explicit
close request drops ``PRESENTER`` to ``MAIN`` until the next re-check.
"""

from __future__ import annotations

from .entities import DeviceCondition, ScreenMode


def mode_for_condition(condition: DeviceCondition) -> ScreenMode:
    return ScreenMode.PRESENTER if condition.presenter_eligible else ScreenMode.MAIN


def recheck(current: ScreenMode, condition: DeviceCondition) -> ScreenMode:
    """Re-evaluate the mode after a viewport/orientation change."""
    if current is ScreenMode.LANDING:
        return current
    return mode_for_condition(condition)


def enter_app(condition: DeviceCondition) -> ScreenMode:
    """Leave the landing screen for whichever mode the device condition selects."""
    return mode_for_condition(condition)


def close_presenter(current: ScreenMode) -> ScreenMode:
    if current is ScreenMode.PRESENTER:
        return ScreenMode.MAIN
    return current


__all__ = ["close_presenter", "enter_app", "mode_for_condition", "recheck"]
