import os
import sys

import pytest

# Add the parent directory to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from history import HistoryStore, MemoryBlobStore  # noqa: E402


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def default_store(monkeypatch, blob_store):
    """Process-wide history backed by a fresh in-memory blob store."""
    store = HistoryStore(blob_store)
    monkeypatch.setattr("history.store._default_store", store)
    return store
