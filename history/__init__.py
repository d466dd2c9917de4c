"""Calculation history: bounded log, blob persistence and change notification."""

from .blob_store import BlobStore, JsonFileBlobStore, MemoryBlobStore
from .broadcast import HistoryBroadcast, history_updated
from .store import (
    HistoryEntry,
    HistoryStore,
    add_calculation,
    configure_default_store,
    get_default_store,
)

__all__ = [
    "BlobStore",
    "HistoryBroadcast",
    "HistoryEntry",
    "HistoryStore",
    "JsonFileBlobStore",
    "MemoryBlobStore",
    "add_calculation",
    "configure_default_store",
    "get_default_store",
    "history_updated",
]
