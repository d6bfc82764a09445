"""
Tests for the results tree provider.
"""

import pytest

from kustox.config import ResultsSettings
from kustox.modules.results.schemas import QueryResult
from kustox.modules.results.store import QueryResultsFileSystem
from kustox.modules.results.tree import EMPTY_LABEL, ResultsTreeProvider


@pytest.fixture
def store():
    return QueryResultsFileSystem(ResultsSettings())


@pytest.fixture
def tree(store):
    provider = ResultsTreeProvider(store)
    yield provider
    provider.dispose()


def _result(row_count: int) -> QueryResult:
    return QueryResult(columns=["A"], rows=[[i] for i in range(row_count)], row_count=row_count)


class TestChildren:
    def test_empty_store_shows_placeholder(self, tree):
        items = tree.get_children()

        assert len(items) == 1
        assert items[0].label == EMPTY_LABEL
        assert items[0].context_value == "empty"
        assert items[0].command is None

    def test_placeholder_after_clearing_empty_store(self, store, tree):
        store.clear_cache()
        items = tree.get_children()
        assert [item.context_value for item in items] == ["empty"]

    def test_current_result_item(self, store, tree):
        result_id = store.add_query_result(
            "T | take 5",
            {"columns": ["A", "B"], "rows": [[1, "x"], [2, "y"]], "rowCount": 2, "executionTime": "0.1s"},
            "clusterX",
            "dbY",
        )

        (item,) = tree.get_children()

        assert "2 rows" in item.label
        assert item.label.startswith(f"Latest Result: {result_id[:12]}...")
        assert item.context_value == "current-result"
        assert item.resource_uri == "kustox-ai://results/latest-result.json"
        assert item.command.command == "open"
        assert item.command.arguments == ["kustox-ai://results/latest-result.json"]
        assert item.tooltip.startswith("Query executed at ")

    def test_overwrite_reflects_latest(self, store, tree):
        store.add_query_result("q1", _result(5), "c", "d")
        store.add_query_result("q2", _result(1), "c", "d")

        (item,) = tree.get_children()
        assert "(1 rows)" in item.label

    def test_back_to_empty_after_clear(self, store, tree):
        store.add_query_result("q", _result(3), "c", "d")
        store.clear_cache()

        (item,) = tree.get_children()
        assert item.context_value == "empty"

    def test_non_root_request_is_flat(self, store, tree):
        store.add_query_result("q", _result(3), "c", "d")
        (item,) = tree.get_children()

        assert tree.get_children(item) == []
        assert tree.get_tree_item(item) is item


class TestRefresh:
    def test_refresh_on_add_and_clear(self, store, tree):
        refreshes = []
        tree.on_did_change_tree_data.subscribe(refreshes.append)

        store.add_query_result("q", _result(1), "c", "d")
        store.add_query_result("q", _result(2), "c", "d")
        store.clear_cache()

        assert refreshes == [None, None, None]

    def test_raw_writes_do_not_refresh(self, store, tree):
        refreshes = []
        tree.on_did_change_tree_data.subscribe(refreshes.append)

        store.write_file("/notes.txt", b"x")
        store.delete("/notes.txt")

        assert refreshes == []

    def test_dispose_unsubscribes(self, store):
        provider = ResultsTreeProvider(store)
        refreshes = []
        provider.on_did_change_tree_data.subscribe(refreshes.append)

        provider.dispose()
        store.add_query_result("q", _result(1), "c", "d")

        assert refreshes == []
        assert store.on_result_added.listener_count == 0
        assert store.on_result_cleared.listener_count == 0
