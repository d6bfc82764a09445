"""
KustoX Results - Tree Provider.

Projects the store into a flat, depth-one listing for the host tree view.
Holds no copy of the entry: every listing is re-read from the store.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from kustox.core.events import EventEmitter
from kustox.modules.results.schemas import ResultEntry, ResultTreeItem, TreeCommand
from kustox.modules.results.store import QueryResultsFileSystem, get_results_store

logger = logging.getLogger(__name__)

EMPTY_LABEL = "No query results yet - execute a query to see results here"


class ResultsTreeProvider:
    """Tree data provider over the single latest result."""

    def __init__(self, store: QueryResultsFileSystem):
        self.store = store
        self.on_did_change_tree_data: EventEmitter[ResultTreeItem | None] = EventEmitter("tree-changed")
        self._subscriptions = [
            store.on_result_added.subscribe(self._on_store_changed),
            store.on_result_cleared.subscribe(self._on_store_changed),
        ]

    def _on_store_changed(self, _payload: ResultEntry | None) -> None:
        self.refresh()

    def refresh(self) -> None:
        logger.debug("[TREE] Refreshing results tree")
        self.on_did_change_tree_data.fire(None)

    def get_tree_item(self, element: ResultTreeItem) -> ResultTreeItem:
        return element

    def get_children(self, element: ResultTreeItem | None = None) -> list[ResultTreeItem]:
        if element is not None:
            return []

        entry = self.store.get_current_result()
        if entry is None:
            return [
                ResultTreeItem(
                    label=EMPTY_LABEL,
                    context_value="empty",
                    tooltip=EMPTY_LABEL,
                    icon="info",
                )
            ]

        uri = str(self.store.latest_uri)
        label = f"Latest Result: {entry.id[:12]}... ({entry.row_count} rows)"
        return [
            ResultTreeItem(
                label=label,
                resource_uri=uri,
                context_value="current-result",
                tooltip=f"Query executed at {entry.timestamp.astimezone():%Y-%m-%d %H:%M:%S}",
                icon="file-code",
                command=TreeCommand(command="open", title="Open", arguments=[uri]),
            )
        ]

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self.on_did_change_tree_data.clear()


@lru_cache(maxsize=1)
def get_tree_provider() -> ResultsTreeProvider:
    """Get the tree provider bound to the process-wide store."""
    return ResultsTreeProvider(get_results_store())
