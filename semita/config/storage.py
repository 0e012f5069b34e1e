"""
Storage selection.
Single source of truth for the DocumentStore the services run against.
"""

import logging
from typing import Optional

from semita.core.settings import settings
from semita.storage.base import DocumentStore

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None


def initialize_store() -> DocumentStore:
    """
    Build the configured store once and cache it.

    USE_MOCK_DB=true gives a MemoryStore (persisted to MOCK_DB_PATH when set),
    otherwise a FirestoreStore backed by firebase_admin.
    """
    global _store

    if _store is not None:
        return _store

    if settings.USE_MOCK_DB:
        from semita.storage.memory import MemoryStore
        _store = MemoryStore(path=settings.MOCK_DB_PATH or None)
        logger.info(f"[STORAGE] USING MOCK DATABASE ({settings.MOCK_DB_PATH or 'in-memory only'})")
        return _store

    from semita.config.firebase import initialize_firestore
    from semita.storage.firestore_store import FirestoreStore
    _store = FirestoreStore(initialize_firestore())
    logger.info("[STORAGE] USING FIRESTORE")
    return _store


def get_store() -> DocumentStore:
    """
    Get the initialized store.

    Also used as a FastAPI dependency so tests can swap the backend through
    app.dependency_overrides.
    """
    if _store is None:
        return initialize_store()
    return _store


def set_store(store: Optional[DocumentStore]) -> None:
    """Replace the cached store (None forces re-initialization on next use)."""
    global _store
    _store = store
