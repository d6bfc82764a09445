"""KustoX Results Module - Ephemeral latest-result store and its tree view."""

from kustox.modules.results.schemas import QueryResult, ResultEntry
from kustox.modules.results.store import QueryResultsFileSystem, get_results_store
from kustox.modules.results.tree import ResultsTreeProvider, get_tree_provider
from kustox.modules.results.uri import ResultUri, latest_result_uri

__all__ = [
    "QueryResult",
    "ResultEntry",
    "QueryResultsFileSystem",
    "ResultsTreeProvider",
    "ResultUri",
    "get_results_store",
    "get_tree_provider",
    "latest_result_uri",
]
