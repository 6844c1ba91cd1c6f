from __future__ import annotations

import logging
from typing import Optional

from ..domain import display_mode
from ..domain.entities import DeviceCondition, ScreenMode
from ..domain.ports import ViewportPort
from .view_state_vm import ViewStateVM

log = logging.getLogger(__name__)


class DisplayModeVM:
    """Chooses between landing, presenter and main screens.

    The condition is read from the viewport at call time, so every resize or
    orientation notification only has to call :meth:`recheck`.
    """

    def __init__(
        self,
        state: ViewStateVM,
        viewport: ViewportPort,
        *,
        mobile_breakpoint_px: int = 768,
    ) -> None:
        self._state = state
        self._viewport = viewport
        self.mobile_breakpoint_px = int(mobile_breakpoint_px)

    @property
    def mode(self) -> ScreenMode:
        return self._state.snapshot.screen_mode

    def device_condition(self) -> DeviceCondition:
        width, height = self._viewport.viewport_size()
        return DeviceCondition(
            width=int(width),
            height=int(height),
            mobile_breakpoint_px=self.mobile_breakpoint_px,
        )

    def recheck(self, _payload: Optional[object] = None) -> ScreenMode:
        """Re-evaluate after a viewport change. No effect while on the landing screen."""
        return self._apply(display_mode.recheck(self.mode, self.device_condition()), "recheck")

    def enter_app(self) -> ScreenMode:
        if self.mode is not ScreenMode.LANDING:
            return self.recheck()
        return self._apply(display_mode.enter_app(self.device_condition()), "enter app")

    def close_presenter(self, _payload: Optional[object] = None) -> ScreenMode:
        return self._apply(display_mode.close_presenter(self.mode), "close presenter")

    def _apply(self, target: ScreenMode, reason: str) -> ScreenMode:
        if target is not self.mode:
            log.info("Screen mode %s -> %s (%s)", self.mode.value, target.value, reason)
            self._state.set_screen_mode(target)
        return target
