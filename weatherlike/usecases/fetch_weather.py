"""Weather fetch lifecycle: loading, success, failure, and stale results.

Every call is one independent fetch cycle. Calls are numbered in issue
order; when a call settles after a newer one was issued, its outcome is
dropped so the view always reflects the most recently issued request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from weatherlike.domain.entities import FetchRequest, WeatherPayload
from weatherlike.domain.ports import WeatherPort
from weatherlike.viewmodels.view_state_vm import ViewStateVM

from .error_mapping import GENERIC_FETCH_MESSAGE, map_api_error

log = logging.getLogger(__name__)


@dataclass
class FetchWeather:
    weather_port: WeatherPort
    state: ViewStateVM
    _issued: int = field(default=0, init=False, repr=False)

    @property
    def latest_sequence(self) -> int:
        return self._issued

    async def __call__(self, request: FetchRequest) -> Optional[WeatherPayload]:
        """Run one fetch cycle; returns the payload only when it was applied.

        Provider failures never propagate: they end up in ``ViewState.error``.
        """
        self._issued += 1
        seq = self._issued
        self.state.begin_fetch()
        log.debug("Fetch #%d issued (%s)", seq, request.describe())

        try:
            payload = await self._call_provider(request)
        except Exception as exc:
            err = map_api_error(exc, default_message=GENERIC_FETCH_MESSAGE)
            if self._is_stale(seq):
                return None
            log.warning("Fetch #%d failed (%s): [%s] %s", seq, request.describe(), err.code, err.message)
            self.state.fail_fetch(err.message or GENERIC_FETCH_MESSAGE)
            return None

        if self._is_stale(seq):
            return None
        self.state.complete_fetch(payload, close_postal_prompt=request.kind == "postal")
        log.debug("Fetch #%d applied: %s", seq, payload.location.name)
        return payload

    async def _call_provider(self, request: FetchRequest) -> WeatherPayload:
        if request.coordinates is not None:
            return await self.weather_port.get_by_coordinates(
                request.coordinates.lat, request.coordinates.lon
            )
        return await self.weather_port.get_by_postal_code(request.code or "")

    def _is_stale(self, seq: int) -> bool:
        if seq == self._issued:
            return False
        log.debug("Fetch #%d superseded by #%d; result discarded", seq, self._issued)
        return True
