"""KustoX Modules - All application modules."""
