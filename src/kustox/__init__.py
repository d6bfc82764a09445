"""KustoX - query result bridge for editor hosts."""

__version__ = "0.1.0"
