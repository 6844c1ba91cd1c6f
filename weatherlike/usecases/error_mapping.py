"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from weatherlike.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    provider_reason,
)
from weatherlike.domain.ports import UseCaseError

GENERIC_FETCH_MESSAGE = "Failed to fetch weather data"

TIMEOUT_MESSAGE = "Weather service timed out. Check connection."
PROVIDER_DOWN_MESSAGE = "Weather service error, try again."


def map_api_error(
    exc: BaseException,
    *,
    default_code: str = "FETCH_FAILED",
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Failure raised by a provider call.
        default_code: Code used when the failure is not a known adapter error.
        default_message: Message used when the failure carries none.

    Returns:
        UseCaseError: Error whose ``message`` is safe to show to the user.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", TIMEOUT_MESSAGE)
    if isinstance(exc, ApiClientError):
        return _map_client_error(exc)
    if isinstance(exc, ApiServerError):
        return UseCaseError("PROVIDER_ERROR", PROVIDER_DOWN_MESSAGE)
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc) or default_message or GENERIC_FETCH_MESSAGE)

    text = str(exc).strip()
    return UseCaseError(default_code, text or default_message or GENERIC_FETCH_MESSAGE)


def _map_client_error(exc: ApiClientError) -> UseCaseError:
    status = exc.status or 0
    reason = exc.hint or provider_reason(exc.payload)
    if status == 404:
        return UseCaseError("NOT_FOUND", _with_reason(str(exc) or "Location not found", None))
    if status in (400, 422):
        return UseCaseError("INVALID_INPUT", _with_reason("Invalid location", reason or str(exc)))
    label = f"Request failed (HTTP {status})" if status else "Request failed"
    return UseCaseError("REQUEST_FAILED", _with_reason(label, reason))


def _with_reason(base: str, reason: Optional[str]) -> str:
    """``base: reason`` when a distinct reason exists, else ``base`` ending in a period."""
    extra = (reason or "").strip()
    if extra and extra != base:
        return f"{base}: {extra}"
    return base if base.endswith(".") else f"{base}."


__all__ = ["GENERIC_FETCH_MESSAGE", "map_api_error"]
