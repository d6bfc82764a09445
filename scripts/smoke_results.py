#!/usr/bin/env python3
"""Smoke check for the results store without running a real query.

Adds a mock StormEvents result, prints stats, the tree and the encoded file.
"""
import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from kustox.modules.results import ResultsTreeProvider, QueryResultsFileSystem  # noqa: E402

MOCK_RESULT = {
    "columns": ["Timestamp", "EventType", "State", "DamageProperty"],
    "rows": [
        ["2025-01-01T10:00:00Z", "Tornado", "Kansas", 50000],
        ["2025-01-01T11:00:00Z", "Thunderstorm", "Texas", 25000],
        ["2025-01-01T12:00:00Z", "Hail", "Oklahoma", 15000],
    ],
    "rowCount": 3,
    "hasData": True,
    "executionTime": "245ms",
}

print("🧪 RESULTS STORE - SMOKE CHECK\n")

store = QueryResultsFileSystem()
tree = ResultsTreeProvider(store)

print("🌲 Tree before:", [item.label for item in tree.get_children()])

result_id = store.add_query_result(
    'StormEvents | where EventType in ("Tornado", "Thunderstorm", "Hail") | take 3',
    MOCK_RESULT,
    "https://help.kusto.windows.net",
    "Samples",
    "test-webview-uri",
)
print(f"✅ Result added with ID: {result_id}")

stats = store.get_storage_stats()
print(f"📊 Stats: memory_count={stats.memory_count}, total_size_mb={stats.total_size_mb:.6f}")
print("🌲 Tree after:", [item.label for item in tree.get_children()])

payload = json.loads(store.read_file(store.latest_uri))
print(f"📄 {store.latest_uri}: {len(payload['data'])} rows, schema={[c['name'] for c in payload['schema']]}")

store.clear_cache()
print("🧹 Cleared, tree:", [item.label for item in tree.get_children()])
