"""Blocking HTTP transport shared by the weather provider calls.

``RetryingSession`` keeps one ``requests.Session`` per adapter so forecast,
reverse-geocode and postal lookups reuse connections. Only transport
failures are retried; any HTTP answer, including 4xx/5xx, is returned to the
caller, which decides how to type it (see ``api_errors.raise_for_status``).

Call context:
    Constructed by ``weatherlike.adapters.weather_rest.WeatherRestAdapter`` and
    only ever used from its worker-thread methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from weatherlike import __version__
from weatherlike.adapters.api_errors import ApiTimeoutError

USER_AGENT = f"weatherlike/{__version__}"

log = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry policy for provider calls.

    Attributes:
        request_timeout_s: Per-attempt timeout in seconds.
        retries: Extra attempts after the first one fails at transport level.
    """
    request_timeout_s: int = 10
    retries: int = 2

    @property
    def attempts(self) -> int:
        return max(0, self.retries) + 1


class RetryingSession:
    """``requests.Session`` wrapper with fixed headers and transport retries."""

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        self.cfg = cfg or HttpConfig()
        self.session = requests.Session()

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """GET ``url``, retrying timeouts and dropped connections.

        Raises:
            ApiTimeoutError: Every attempt failed before a response arrived.
        """
        headers = {"Accept": accept, "User-Agent": USER_AGENT}
        wait = timeout or self.cfg.request_timeout_s
        for attempt in range(1, self.cfg.attempts + 1):
            try:
                return self.session.get(url, params=params, headers=headers, timeout=wait)
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                log.debug("GET %s attempt %d/%d failed: %s", url, attempt, self.cfg.attempts, exc)
        raise ApiTimeoutError(
            f"No response from {url} after {self.cfg.attempts} attempt(s)",
            context=f"GET {url}",
        )

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "RetryingSession", "USER_AGENT"]
