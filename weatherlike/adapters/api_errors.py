"""Typed failures raised by the weather provider adapters.

Open-Meteo answers bad requests with ``{"error": true, "reason": "..."}``;
Zippopotam answers unknown codes with an empty object and HTTP 404. Both
are folded into the hierarchy below so use cases can map them by type and
status instead of parsing text.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

_REASON_KEYS = ("reason", "detail", "message", "title")
_BODY_SNIPPET_CHARS = 400


class ApiError(RuntimeError):
    """Base class for weather provider adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from a provider (bad coordinates, unknown postal code)."""


class ApiServerError(ApiError):
    """HTTP 5xx from a provider."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""


def read_error_body(resp: Any) -> Any:
    """Decoded JSON body of a failed response, else a trimmed text snippet."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_BODY_SNIPPET_CHARS] or None


def provider_reason(payload: Any) -> Optional[str]:
    """Pull the human readable reason out of an error body, if there is one."""
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, Mapping):
        for key in _REASON_KEYS:
            found = provider_reason(payload.get(key))
            if found:
                return found
        return None
    if isinstance(payload, (list, tuple)):
        parts = [part for part in map(provider_reason, payload[:3]) if part]
        return "; ".join(parts) or None
    return None


def raise_for_status(resp: Any, ctx: str) -> None:
    """Raise the typed error matching a non-2xx response; no-op on success."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return
    body = read_error_body(resp)
    reason = provider_reason(body)
    message = f"{ctx}: {reason} (HTTP {status})" if reason else f"{ctx}: HTTP {status}"
    error_cls = ApiClientError if 400 <= status < 500 else ApiServerError
    raise error_cls(message, status=status, hint=reason, payload=body, context=ctx)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "provider_reason",
    "raise_for_status",
    "read_error_body",
]
