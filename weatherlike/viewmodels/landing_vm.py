from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.ports import AmbientEffectPort

log = logging.getLogger(__name__)


@dataclass
class LandingVM:
    """Landing screen state around the optional ambient effect.

    ``use_fallback`` tells the view to render the static landing screen.
    """

    effect: Optional[AmbientEffectPort] = None
    running: bool = False
    use_fallback: bool = False

    def start(self) -> bool:
        """Try to start the effect; returns ``True`` when it is running."""
        if self.running:
            return True
        if self.effect is None:
            self.use_fallback = True
            return False
        try:
            self.effect.start()
        except Exception as exc:
            log.warning("Ambient effect failed to initialize: %s", exc)
            self.use_fallback = True
            return False
        self.running = True
        self.use_fallback = False
        return True

    def stop(self) -> None:
        if not self.running or self.effect is None:
            return
        self.running = False
        try:
            self.effect.stop()
        except Exception:
            log.exception("Ambient effect failed to stop")
