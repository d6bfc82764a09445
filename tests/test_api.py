"""
Tests for KustoX API endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from kustox.config import get_settings
from kustox.main import app
from kustox.modules.results.store import get_results_store
from kustox.modules.results.tree import get_tree_provider
from kustox.observability import get_metrics_store

SAMPLE = {
    "query": "T | take 5",
    "result": {
        "columns": ["A", "B"],
        "rows": [[1, "x"], [2, "y"]],
        "rowCount": 2,
        "executionTime": "0.1s",
        "hasData": True,
    },
    "cluster": "clusterX",
    "database": "dbY",
}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _fresh_state():
    """Each test starts with an empty store, default settings and no metrics."""
    get_settings.cache_clear()
    get_results_store.cache_clear()
    get_tree_provider.cache_clear()
    get_metrics_store().reset()
    yield
    get_settings.cache_clear()
    get_results_store.cache_clear()
    get_tree_provider.cache_clear()


class TestHealth:
    """Health check tests."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["features"] == {"results": True, "tree": True}

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "docs" in response.json()

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestResultsEndpoints:
    """Domain endpoints."""

    def test_add_and_get_current(self, client):
        response = client.post("/results", json=SAMPLE)
        assert response.status_code == 201
        body = response.json()
        assert body["uri"] == "kustox-ai://results/latest-result.json"

        current = client.get("/results/current").json()
        assert current["id"] == body["id"]
        assert current["row_count"] == 2
        assert current["result"]["rowCount"] == 2

        assert len(client.get("/results").json()) == 1
        assert client.get(f"/results/{body['id']}").status_code == 200

    def test_current_when_empty(self, client):
        response = client.get("/results/current")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_stale_id_not_found(self, client):
        stale = client.post("/results", json=SAMPLE).json()["id"]
        client.post("/results", json={**SAMPLE, "query": "T | take 1"})

        response = client.get(f"/results/{stale}")
        assert response.status_code == 404
        assert len(client.get("/results").json()) == 1

    def test_clear_cache_twice(self, client):
        client.post("/results", json=SAMPLE)

        assert client.delete("/results/cache").status_code == 204
        assert client.delete("/results/cache").status_code == 204
        assert client.get("/results").json() == []

    def test_stats(self, client):
        assert client.get("/results/stats").json() == {"memory_count": 0, "total_size_mb": 0.0}
        client.post("/results", json=SAMPLE)
        stats = client.get("/results/stats").json()
        assert stats["memory_count"] == 1
        assert stats["total_size_mb"] > 0

    def test_tree(self, client):
        items = client.get("/results/tree").json()
        assert [item["context_value"] for item in items] == ["empty"]

        client.post("/results", json=SAMPLE)
        (item,) = client.get("/results/tree").json()
        assert "2 rows" in item["label"]

    def test_tree_feature_disabled(self, client, monkeypatch):
        monkeypatch.setenv("FEATURE_TREE", "false")
        get_settings.cache_clear()

        response = client.get("/results/tree")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "FEATURE_DISABLED"

    def test_results_feature_disabled(self, client, monkeypatch):
        monkeypatch.setenv("FEATURE_RESULTS", "false")
        get_settings.cache_clear()

        assert client.post("/results", json=SAMPLE).status_code == 503


class TestFileSystemEndpoints:
    """File-system endpoints."""

    def test_read_latest_file(self, client):
        client.post("/results", json=SAMPLE)

        response = client.get("/results/fs/file", params={"path": "/latest-result.json"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")

        payload = json.loads(response.content)
        assert [col["name"] for col in payload["schema"]] == ["A", "B"]
        assert payload["data"] == [[1, "x"], [2, "y"]]

    def test_read_after_clear(self, client):
        client.post("/results", json=SAMPLE)
        client.delete("/results/cache")

        response = client.get("/results/fs/file", params={"path": "/latest-result.json"})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "FILE_NOT_FOUND"

    def test_stat_and_directory(self, client):
        assert client.get("/results/fs/stat", params={"path": "/"}).json()["type"] == 2
        assert client.get("/results/fs/directory", params={"path": "/"}).json() == []

        client.post("/results", json=SAMPLE)

        stat = client.get("/results/fs/stat", params={"path": "/latest-result.json"}).json()
        assert stat["type"] == 1
        assert stat["size"] > 0
        listing = client.get("/results/fs/directory", params={"path": "/"}).json()
        assert listing == [{"name": "latest-result.json", "type": 1}]

    @pytest.mark.parametrize("path", ["/.git", "/package.json", "file://elsewhere/"])
    def test_workspace_probes(self, client, path):
        assert client.get("/results/fs/stat", params={"path": path}).status_code == 404
        assert client.get("/results/fs/directory", params={"path": path}).status_code == 404

    def test_write_read_delete(self, client):
        client.post("/results", json=SAMPLE)

        response = client.put("/results/fs/file", params={"path": "/notes.txt"}, content=b"hello")
        assert response.status_code == 204

        response = client.get("/results/fs/file", params={"path": "/notes.txt"})
        assert response.content == b"hello"
        listing = client.get("/results/fs/directory", params={"path": "/"}).json()
        assert [entry["name"] for entry in listing] == ["latest-result.json"]

        assert client.delete("/results/fs/file", params={"path": "/notes.txt"}).status_code == 204
        assert client.get("/results/fs/file", params={"path": "/notes.txt"}).status_code == 404
        assert client.get("/results/current").status_code == 200


class TestMetrics:
    def test_operations_recorded(self, client):
        client.post("/results", json=SAMPLE)
        client.get("/results/fs/file", params={"path": "/missing.json"})

        summary = client.get("/metrics").json()

        assert summary["operations"]["add_query_result"]["call_count"] == 1
        assert summary["operations"]["read_file"]["call_count"] == 1
        assert summary["operations"]["read_file"]["errors"] == {"FILE_NOT_FOUND": 1}
        assert summary["global_errors"]["FILE_NOT_FOUND"] == 1
