"""
KustoX Results - Router.

HTTP surface over the result store so a host can drive the virtual file system
and the results tree without linking against Python.
"""

from fastapi import APIRouter, Request, Response, status

from kustox.deps import ResultsStore, ResultsTree, require_results, require_tree
from kustox.exceptions import NotFoundException
from kustox.modules.results.schemas import (
    AddQueryResultRequest,
    AddQueryResultResponse,
    DirectoryEntry,
    FileStat,
    ResultEntry,
    ResultTreeItem,
    StorageStats,
)
from kustox.observability import track_operation

router = APIRouter(
    prefix="/results",
    tags=["results"],
    dependencies=[require_results],
)


# =============================================================================
# Domain Endpoints
# =============================================================================


@router.post("", response_model=AddQueryResultResponse, status_code=status.HTTP_201_CREATED)
async def add_query_result(request: AddQueryResultRequest, store: ResultsStore):
    """Store a query result, replacing whatever was there."""
    with track_operation("add_query_result"):
        result_id = store.add_query_result(
            request.query,
            request.result,
            request.cluster,
            request.database,
            request.webview_uri,
        )
    return AddQueryResultResponse(id=result_id, uri=str(store.latest_uri))


@router.get("", response_model=list[ResultEntry])
async def list_results(store: ResultsStore):
    """List stored results (zero or one)."""
    return store.get_all_results()


@router.get("/current", response_model=ResultEntry)
async def get_current_result(store: ResultsStore):
    """Get the latest result."""
    entry = store.get_current_result()
    if entry is None:
        raise NotFoundException("result", "current")
    return entry


@router.get("/stats", response_model=StorageStats)
async def get_storage_stats(store: ResultsStore):
    """Get approximate memory usage."""
    return store.get_storage_stats()


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(store: ResultsStore):
    """Discard the current result and every stored payload."""
    with track_operation("clear_cache"):
        store.clear_cache()


@router.get("/tree", response_model=list[ResultTreeItem], dependencies=[require_tree])
async def get_tree_items(tree: ResultsTree):
    """Root items of the results tree."""
    return tree.get_children()


# =============================================================================
# File System Endpoints
# =============================================================================


@router.get("/fs/stat", response_model=FileStat)
async def stat(store: ResultsStore, path: str = "/"):
    with track_operation("stat"):
        return store.stat(path)


@router.get("/fs/directory", response_model=list[DirectoryEntry])
async def read_directory(store: ResultsStore, path: str = "/"):
    with track_operation("read_directory"):
        entries = store.read_directory(path)
    return [DirectoryEntry(name=name, type=file_type) for name, file_type in entries]


@router.get("/fs/file")
async def read_file(store: ResultsStore, path: str):
    with track_operation("read_file"):
        data = store.read_file(path)
    media_type = "application/json" if path.endswith(".json") else "application/octet-stream"
    return Response(content=data, media_type=media_type)


@router.put("/fs/file", status_code=status.HTTP_204_NO_CONTENT)
async def write_file(request: Request, store: ResultsStore, path: str):
    """Write raw bytes. The current result entry is not updated."""
    content = await request.body()
    with track_operation("write_file"):
        store.write_file(path, content)


@router.delete("/fs/file", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(store: ResultsStore, path: str):
    """Delete raw bytes. The current result entry is not cleared."""
    with track_operation("delete"):
        store.delete(path)


# Declared last so the static routes above win
@router.get("/{result_id}", response_model=ResultEntry)
async def get_result(result_id: str, store: ResultsStore):
    """Get a result by id. Only the current result resolves."""
    entry = store.get_result(result_id)
    if entry is None:
        raise NotFoundException("result", result_id)
    return entry
