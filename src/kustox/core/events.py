"""
KustoX Events.

Explicit subscriber lists with synchronous, ordered fan-out.
A listener that raises is logged and skipped; delivery continues to the rest.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Disposable:
    """Handle returned by a subscription. Releasing it twice is a no-op."""

    def __init__(self, on_dispose: Callable[[], None] | None = None):
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._on_dispose is not None:
            self._on_dispose()
            self._on_dispose = None

    def __enter__(self) -> Disposable:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()


class _Subscription:
    __slots__ = ("listener", "active")

    def __init__(self, listener: Callable):
        self.listener = listener
        self.active = True


class EventEmitter(Generic[T]):
    """Single notification channel."""

    def __init__(self, name: str = "event"):
        self.name = name
        self._subscriptions: list[_Subscription] = []

    def subscribe(self, listener: Callable[[T], None]) -> Disposable:
        """Register a listener; delivery follows registration order."""
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def _remove() -> None:
            subscription.active = False
            self._subscriptions = [s for s in self._subscriptions if s is not subscription]

        return Disposable(_remove)

    def fire(self, payload: T | None = None) -> None:
        """Deliver payload to every current listener."""
        for subscription in list(self._subscriptions):
            # Released during this fan-out
            if not subscription.active:
                continue
            try:
                subscription.listener(payload)
            except Exception:
                logger.exception(f"[EVENTS] Listener failed on '{self.name}'")

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def clear(self) -> None:
        for subscription in self._subscriptions:
            subscription.active = False
        self._subscriptions = []
