"""
KustoX Results - Ephemeral Result Store.

Holds the most recent query result in memory and exposes it as a tiny
virtual file system: a root directory and a single ``latest-result.json``.
Each new result overwrites the previous one. Nothing survives a restart.

Mutations run to completion before any listener is notified, and never
suspend, so observers always see a consistent entry/file pair.
"""

from __future__ import annotations

import json
import logging
import random
import string
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Union

from pydantic_core import to_jsonable_python

from kustox.config import ResultsSettings, get_settings
from kustox.core.events import Disposable, EventEmitter
from kustox.exceptions import FileNotFoundException
from kustox.modules.results.schemas import (
    FileChangeEvent,
    FileChangeType,
    FileStat,
    FileType,
    QueryResult,
    ResultEntry,
    StorageStats,
)
from kustox.modules.results.uri import ResultUri, latest_result_uri

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits

VISUAL_AVAILABLE = "Available in KustoX visual view"
VISUAL_MISSING = "Execute query to see visual"


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_result_id() -> str:
    """Opaque id: epoch milliseconds plus a random base-36 suffix."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"result_{_now_ms()}_{suffix}"


# =============================================================================
# Store State
# =============================================================================


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class HasResult:
    entry: ResultEntry


StoreState = Union[Empty, HasResult]


@dataclass
class VirtualFile:
    data: bytes
    ctime: int
    mtime: int


# =============================================================================
# Store
# =============================================================================


class QueryResultsFileSystem:
    """Single-slot result store with file-system-provider semantics."""

    def __init__(self, settings: ResultsSettings | None = None):
        self.settings = settings or get_settings().results
        self.latest_uri = latest_result_uri(self.settings)

        self._state: StoreState = Empty()
        self._files: dict[str, VirtualFile] = {}
        self._created_at = _now_ms()

        self.on_did_change_file: EventEmitter[list[FileChangeEvent]] = EventEmitter("file-changed")
        self.on_result_added: EventEmitter[ResultEntry] = EventEmitter("result-added")
        self.on_result_cleared: EventEmitter[None] = EventEmitter("result-cleared")

    @property
    def state(self) -> StoreState:
        return self._state

    # -------------------------------------------------------------------------
    # Domain operations
    # -------------------------------------------------------------------------

    def add_query_result(
        self,
        query: str,
        result: QueryResult | Mapping[str, Any],
        cluster: str,
        database: str,
        webview_uri: str | None = None,
    ) -> str:
        """Replace the current entry and re-encode ``latest-result.json``."""
        if not isinstance(result, QueryResult):
            result = QueryResult.model_validate(result or {})

        logger.info(
            f"[RESULTS] Adding query result: query='{(query or '')[:50]}', "
            f"cluster={cluster}, database={database}"
        )

        entry = ResultEntry(
            id=generate_result_id(),
            timestamp=datetime.now(timezone.utc),
            query=query or "",
            result=result,
            database=database or "",
            cluster=cluster or "",
            row_count=result.row_count or 0,
            column_count=len(result.columns),
            webview_uri=webview_uri,
        )

        self._state = HasResult(entry)
        payload = self.encode_entry(entry)
        self._store(self.latest_uri, payload)
        logger.info(f"[RESULTS] Stored {self.latest_uri} ({len(payload)} bytes) for {entry.id}")

        self.on_did_change_file.fire([FileChangeEvent(FileChangeType.CHANGED, self.latest_uri)])
        self.on_result_added.fire(entry)
        return entry.id

    def get_current_result(self) -> ResultEntry | None:
        if isinstance(self._state, HasResult):
            return self._state.entry
        return None

    def get_result(self, result_id: str) -> ResultEntry | None:
        """Only the current entry resolves; stale ids return None."""
        entry = self.get_current_result()
        if entry is not None and entry.id == result_id:
            return entry
        return None

    def get_all_results(self) -> list[ResultEntry]:
        entry = self.get_current_result()
        return [entry] if entry is not None else []

    def clear_cache(self) -> None:
        """Drop the entry and every stored payload."""
        had_result = isinstance(self._state, HasResult)
        self._state = Empty()
        self._files.clear()
        logger.info(f"[RESULTS] Cache cleared (had_result={had_result})")

        self.on_did_change_file.fire([FileChangeEvent(FileChangeType.DELETED, self.latest_uri)])
        self.on_result_cleared.fire(None)

    def get_storage_stats(self) -> StorageStats:
        entry = self.get_current_result()
        size = len(entry.model_dump_json()) if entry is not None else 0
        return StorageStats(
            memory_count=1 if entry is not None else 0,
            total_size_mb=size / (1024 * 1024),
        )

    def encode_entry(self, entry: ResultEntry) -> bytes:
        """Project an entry into the JSON document served at the latest path."""
        document = {
            "metadata": {
                "id": entry.id,
                "timestamp": entry.timestamp,
                "query": entry.query,
                "cluster": entry.cluster,
                "database": entry.database,
                "rowCount": entry.row_count,
                "columnCount": entry.column_count,
                "visualDisplay": VISUAL_AVAILABLE if entry.webview_uri else VISUAL_MISSING,
            },
            "schema": [{"name": column, "type": "string"} for column in entry.result.columns],
            "data": entry.result.rows,
        }
        text = json.dumps(to_jsonable_python(document), indent=self.settings.json_indent)
        return text.encode("utf-8")

    # -------------------------------------------------------------------------
    # File system provider
    # -------------------------------------------------------------------------

    def watch(
        self,
        uri: ResultUri | str,
        listener: Callable[[list[FileChangeEvent]], None],
    ) -> Disposable:
        """Subscribe to every change in the space; the uri is not used for filtering."""
        return self.on_did_change_file.subscribe(listener)

    def stat(self, uri: ResultUri | str) -> FileStat:
        uri = self._resolve(uri)
        if not self._in_space(uri):
            raise FileNotFoundException(uri)
        if uri.path == self.latest_uri.path:
            stored = self._files.get(str(uri))
            if stored is not None:
                return FileStat(
                    type=FileType.FILE,
                    ctime=stored.ctime,
                    mtime=stored.mtime,
                    size=len(stored.data),
                )
        elif uri.is_root:
            return FileStat(
                type=FileType.DIRECTORY,
                ctime=self._created_at,
                mtime=self._created_at,
                size=0,
            )
        # Probes such as /.git or /package.json must never resolve
        raise FileNotFoundException(uri)

    def read_directory(self, uri: ResultUri | str) -> list[tuple[str, FileType]]:
        uri = self._resolve(uri)
        if not self._in_space(uri) or not uri.is_root:
            raise FileNotFoundException(uri)
        if isinstance(self._state, HasResult):
            return [(self.latest_uri.name, FileType.FILE)]
        return []

    def read_file(self, uri: ResultUri | str) -> bytes:
        uri = self._resolve(uri)
        stored = self._files.get(str(uri))
        if stored is None:
            raise FileNotFoundException(uri)
        return stored.data

    def write_file(self, uri: ResultUri | str, content: bytes) -> None:
        """Raw byte write. Does not touch the current entry."""
        uri = self._resolve(uri)
        self._store(uri, bytes(content))
        self.on_did_change_file.fire([FileChangeEvent(FileChangeType.CHANGED, uri)])

    def delete(self, uri: ResultUri | str) -> None:
        """Raw byte delete. Does not touch the current entry; see clear_cache."""
        uri = self._resolve(uri)
        self._files.pop(str(uri), None)
        self.on_did_change_file.fire([FileChangeEvent(FileChangeType.DELETED, uri)])

    def create_directory(self, uri: ResultUri | str) -> None:
        pass

    def rename(self, old_uri: ResultUri | str, new_uri: ResultUri | str) -> None:
        pass

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve(self, uri: ResultUri | str) -> ResultUri:
        return ResultUri.parse(uri, self.settings)

    def _in_space(self, uri: ResultUri) -> bool:
        return uri.scheme == self.settings.scheme and uri.authority == self.settings.authority

    def _store(self, uri: ResultUri, data: bytes) -> None:
        key = str(uri)
        now = _now_ms()
        previous = self._files.get(key)
        self._files[key] = VirtualFile(
            data=data,
            ctime=previous.ctime if previous is not None else now,
            mtime=now,
        )


# -----------------------------------------------------------------------------
# Singleton accessor
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_results_store() -> QueryResultsFileSystem:
    """Get the process-wide result store."""
    return QueryResultsFileSystem()
