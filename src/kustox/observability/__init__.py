"""
KustoX Observability Module.

Provides in-process metrics collection for store operations and errors.
"""

from kustox.observability.metrics import MetricsStore, get_metrics_store, track_operation

__all__ = ["MetricsStore", "get_metrics_store", "track_operation"]
