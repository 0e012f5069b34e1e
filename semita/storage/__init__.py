"""
Storage backends.

DocumentStore is the interface the services depend on; MemoryStore and
FirestoreStore are the two implementations.
"""

from semita.storage.base import (
    COMPLAINT_PREFIX,
    NOTIFICATION_PREFIX,
    SERVICE_PREFIX,
    VOTE_PREFIX,
    DocumentStore,
    Record,
    make_key,
    strip_prefix,
)
from semita.storage.memory import MemoryStore

__all__ = [
    "COMPLAINT_PREFIX",
    "NOTIFICATION_PREFIX",
    "SERVICE_PREFIX",
    "VOTE_PREFIX",
    "DocumentStore",
    "MemoryStore",
    "Record",
    "make_key",
    "strip_prefix",
]
