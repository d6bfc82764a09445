"""KustoX Core - Shared building blocks."""

from kustox.core.events import Disposable, EventEmitter

__all__ = ["Disposable", "EventEmitter"]
