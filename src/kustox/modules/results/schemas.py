"""
KustoX Results - Schemas.

Pydantic models for query results, the stored entry, and the file-system surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kustox.modules.results.uri import ResultUri


# =============================================================================
# Query Results
# =============================================================================


class QueryResult(BaseModel):
    """Result produced by the query executor. Read-only to the store."""

    model_config = ConfigDict(populate_by_name=True)

    columns: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    row_count: int = Field(default=0, alias="rowCount")
    total_rows: int | None = Field(default=None, alias="totalRows")
    execution_time: str = Field(default="", alias="executionTime")
    has_data: bool | None = Field(default=None, alias="hasData")
    error: str | None = None

    @field_validator("columns", "rows", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("row_count", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @model_validator(mode="after")
    def _derive_has_data(self) -> QueryResult:
        if self.has_data is None:
            self.has_data = self.row_count > 0
        return self


class ResultEntry(BaseModel):
    """The single in-memory record of the most recent query outcome."""

    id: str
    timestamp: datetime
    query: str
    result: QueryResult
    database: str
    cluster: str
    row_count: int
    column_count: int
    webview_uri: str | None = None


class StorageStats(BaseModel):
    """Approximate memory footprint of the current entry."""

    memory_count: Literal[0, 1]
    total_size_mb: float


# =============================================================================
# File System Surface
# =============================================================================


class FileType(IntEnum):
    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2


class FileChangeType(IntEnum):
    CHANGED = 1
    CREATED = 2
    DELETED = 3


@dataclass(frozen=True)
class FileChangeEvent:
    type: FileChangeType
    uri: ResultUri


class FileStat(BaseModel):
    """File metadata; ctime/mtime are epoch milliseconds."""

    type: FileType
    ctime: int
    mtime: int
    size: int


# =============================================================================
# Tree
# =============================================================================


class TreeCommand(BaseModel):
    command: str
    title: str
    arguments: list[str] = Field(default_factory=list)


class ResultTreeItem(BaseModel):
    """Flat display item rendered by the host tree view."""

    label: str
    collapsible_state: Literal["none", "collapsed", "expanded"] = "none"
    resource_uri: str | None = None
    context_value: str | None = None
    tooltip: str | None = None
    icon: str | None = None
    command: TreeCommand | None = None


# =============================================================================
# Request / Response Schemas
# =============================================================================


class AddQueryResultRequest(BaseModel):
    """Request to store a new query result."""

    query: str = ""
    result: QueryResult
    cluster: str = ""
    database: str = ""
    webview_uri: str | None = None


class AddQueryResultResponse(BaseModel):
    id: str
    uri: str


class DirectoryEntry(BaseModel):
    name: str
    type: FileType
