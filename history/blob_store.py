"""
Key-value blob storage behind the calculation history.

A blob store holds opaque strings under string keys. Failures of the underlying medium
are logged and reported as absence; callers never see an exception from here.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger("fluidcalc-mcp.blob_store")


class BlobStore(ABC):
    """Abstract persistent key-value interface."""

    @abstractmethod
    def read_blob(self, key: str) -> Optional[str]:
        """Return the stored string, or None when absent or unreadable."""

    @abstractmethod
    def write_blob(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def clear_blob(self, key: str) -> None:
        """Forget ``key``; no-op when absent."""


class MemoryBlobStore(BlobStore):
    """In-process store, shared by every reader holding the same instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read_blob(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write_blob(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear_blob(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileBlobStore(BlobStore):
    """
    Blobs kept in a single JSON object file (key -> string).

    The file is rewritten atomically on each write. A missing file reads as empty; an
    unreadable or malformed file is logged and also reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read blob file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Blob file {self.path} does not hold a JSON object, ignoring it")
            return {}
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning(f"Could not write blob file {self.path}: {e}")

    def read_blob(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write_blob(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def clear_blob(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)
