"""
Firestore document store.

Maps each key prefix to a collection and the rest of the key to the
document id:

    complaint:abc      -> complaints/abc
    vote:abc:user-1    -> votes/abc:user-1
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from google.api_core import exceptions as google_exceptions

from semita.core.errors import StorageError
from semita.storage.base import DocumentStore, Record
from semita.utils.firestore_helpers import where_filter

logger = logging.getLogger(__name__)

COLLECTIONS: Dict[str, str] = {
    "service": "services",
    "complaint": "complaints",
    "notif": "notifications",
    "vote": "votes",
}


def split_key(key: str) -> Tuple[str, str]:
    """
    Split "prefix:rest" into (collection name, document id or id prefix).

    Raises:
        ValueError: key has no prefix
    """
    prefix, sep, rest = key.partition(":")
    if not sep:
        raise ValueError(f"Storage key must be prefixed: {key!r}")
    return COLLECTIONS.get(prefix, f"{prefix}s"), rest


class FirestoreStore(DocumentStore):
    """Store backed by a firebase_admin Firestore client."""

    def __init__(self, client):
        super().__init__()
        self.client = client

    @property
    def backend_name(self) -> str:
        return "firestore"

    def _doc(self, key: str):
        collection, doc_id = split_key(key)
        return self.client.collection(collection).document(doc_id)

    @staticmethod
    def _key_for(key_prefix: str, doc_id: str) -> str:
        return f"{key_prefix.partition(':')[0]}:{doc_id}"

    def get(self, key: str) -> Optional[Record]:
        try:
            snapshot = self._doc(key).get()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore get failed for {key}: {e}")
            raise StorageError(f"Failed to read {key}: {e}") from e
        return snapshot.to_dict() if snapshot.exists else None

    def put(self, key: str, value: Record) -> None:
        try:
            self._doc(key).set(value)
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore set failed for {key}: {e}")
            raise StorageError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._doc(key).delete()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore delete failed for {key}: {e}")
            raise StorageError(f"Failed to delete {key}: {e}") from e

    def _stream(self, prefix: str, query_fn=None) -> List[Tuple[str, Record]]:
        collection, id_prefix = split_key(prefix)
        query = self.client.collection(collection)
        if query_fn is not None:
            query = query_fn(query)
        try:
            return [
                (self._key_for(prefix, doc.id), doc.to_dict())
                for doc in query.stream()
                if doc.id.startswith(id_prefix)
            ]
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Firestore stream failed for {collection}: {e}")
            raise StorageError(f"Failed to scan {prefix}: {e}") from e

    def scan(self, prefix: str) -> List[Tuple[str, Record]]:
        return self._stream(prefix)

    def query(self, prefix: str, field: str, value: Any) -> List[Tuple[str, Record]]:
        return self._stream(prefix, lambda q: where_filter(q, field, "==", value))
