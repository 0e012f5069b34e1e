"""
In-memory document store, optionally persisted to a JSON file.

Used for local development (USE_MOCK_DB=true) and tests. Values are deep
copied on the way in and out so callers never share state with the store.
"""

import copy
import json
import logging
import os
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from semita.core.errors import StorageError
from semita.storage.base import DocumentStore, Record

logger = logging.getLogger(__name__)

_DATETIME_TAG = "__datetime__"


def _encode(obj: Any):
    if isinstance(obj, datetime):
        return {_DATETIME_TAG: obj.isoformat()}
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _decode(obj: Dict[str, Any]):
    if len(obj) == 1 and _DATETIME_TAG in obj:
        return datetime.fromisoformat(obj[_DATETIME_TAG])
    return obj


class MemoryStore(DocumentStore):
    """
    Dict-backed store.

    Args:
        path: JSON file to load from and save to after every write.
              None keeps everything in process memory.
    """

    def __init__(self, path: Optional[str] = None):
        super().__init__()
        self.path = path
        self._data: Dict[str, Record] = {}
        self._mutex = threading.RLock()
        if path and os.path.exists(path):
            self._load()

    @property
    def backend_name(self) -> str:
        return "memory"

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._data = json.load(f, object_hook=_decode)
            logger.info(f"[MOCK_DB] Loaded {len(self._data)} records from {self.path}")
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to load mock database {self.path}: {e}") from e

    def _save(self) -> None:
        if not self.path:
            return
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, default=_encode, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError) as e:
            raise StorageError(f"Failed to write mock database {self.path}: {e}") from e

    def get(self, key: str) -> Optional[Record]:
        with self._mutex:
            record = self._data.get(key)
            return copy.deepcopy(record) if record is not None else None

    def put(self, key: str, value: Record) -> None:
        with self._mutex:
            self._data[key] = copy.deepcopy(value)
            self._save()

    def delete(self, key: str) -> None:
        with self._mutex:
            if self._data.pop(key, None) is not None:
                self._save()

    def scan(self, prefix: str) -> List[Tuple[str, Record]]:
        with self._mutex:
            return [
                (key, copy.deepcopy(record))
                for key, record in self._data.items()
                if key.startswith(prefix)
            ]
