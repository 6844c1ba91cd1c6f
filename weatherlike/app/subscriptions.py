"""Registry that owns signal subscriptions for one session.

The orchestrator registers every external subscription here so teardown can
release all of them exactly once, whichever way the session ends.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from ..domain.ports import Subscription

log = logging.getLogger(__name__)


@dataclass
class SubscriptionHandle:
    """Subscription associated with a single signal channel.

    Attributes:
        channel: Channel key (``resize``, ``close-presenter`` ...).
        subscription: Handle returned by the signal source.
    """
    channel: str
    subscription: Subscription


class SubscriptionRegistry:
    """Track subscriptions per channel and release them on demand."""

    def __init__(self) -> None:
        self._handles: Dict[str, SubscriptionHandle] = {}

    def add(self, channel: str, subscription: Subscription) -> None:
        """Register a subscription, releasing any previous one on the same channel."""
        self.release(channel)
        self._handles[channel] = SubscriptionHandle(channel=channel, subscription=subscription)

    def release(self, channel: str) -> None:
        handle = self._handles.pop(channel, None)
        if not handle:
            return
        try:
            handle.subscription.unsubscribe()
        except Exception:
            log.exception("Failed to release '%s' subscription", channel)

    def release_all(self) -> None:
        for channel in list(self._handles.keys()):
            self.release(channel)

    def __len__(self) -> int:
        return len(self._handles)


__all__ = ["SubscriptionHandle", "SubscriptionRegistry"]
