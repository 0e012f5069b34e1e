"""
Document store base interface.

Defines the contract every storage backend implements. Records are plain
dicts keyed by a prefixed identifier:

    service:<id>
    complaint:<id>
    notif:<id>
    vote:<complaint_id>:<user_id>

Backends only need atomic per-key writes; read-modify-write sequences in the
services layer are serialized with lock(key).
"""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

Record = Dict[str, Any]

SERVICE_PREFIX = "service:"
COMPLAINT_PREFIX = "complaint:"
NOTIFICATION_PREFIX = "notif:"
VOTE_PREFIX = "vote:"


def make_key(prefix: str, *parts: str) -> str:
    """make_key("vote:", "c1", "u1") -> "vote:c1:u1"."""
    return prefix + ":".join(parts)


def strip_prefix(key: str, prefix: str) -> str:
    return key[len(prefix):] if key.startswith(prefix) else key


class KeyedLock:
    """
    Registry of one threading.Lock per key.

    Locks are created on first use and kept for the life of the registry;
    the key space (services, complaints, notifications) is small and bounded
    by what has been touched.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def get(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self.get(key)
        with lock:
            yield


class DocumentStore(ABC):
    """
    Abstract base class for storage backends.

    All methods raise StorageError when the backend fails.
    """

    def __init__(self):
        self._locks = KeyedLock()

    def lock(self, key: str):
        """
        Advisory lock for a read-modify-write on `key`.

        Usage:
            with store.lock("complaint:abc"):
                record = store.get("complaint:abc")
                ...
                store.put("complaint:abc", record)
        """
        return self._locks.hold(key)

    @abstractmethod
    def get(self, key: str) -> Optional[Record]:
        """Return a copy of the record, or None if absent."""
        pass

    @abstractmethod
    def put(self, key: str, value: Record) -> None:
        """Create or overwrite the record (last write wins)."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the record. Deleting a missing key is a no-op."""
        pass

    @abstractmethod
    def scan(self, prefix: str) -> List[Tuple[str, Record]]:
        """Return (key, record) pairs for every key starting with `prefix`."""
        pass

    def query(self, prefix: str, field: str, value: Any) -> List[Tuple[str, Record]]:
        """
        Equality filter over a prefix scan.

        Backends with native filtering override this.
        """
        return [(key, record) for key, record in self.scan(prefix) if record.get(field) == value]

    def ping(self) -> Dict[str, Any]:
        """Lightweight connectivity check used by /health/db."""
        self.scan(SERVICE_PREFIX)
        return {"backend": self.backend_name}

    @property
    @abstractmethod
    def backend_name(self) -> str:
        pass
