import threading
from datetime import datetime, timezone
from unittest import mock

import pytest
from google.api_core import exceptions as google_exceptions

from semita.core.errors import StorageError
from semita.storage.base import KeyedLock, make_key, strip_prefix
from semita.storage.firestore_store import FirestoreStore, split_key
from semita.storage.memory import MemoryStore


def test_make_key_and_strip_prefix():
    assert make_key("vote:", "c1", "u1") == "vote:c1:u1"
    assert make_key("complaint:", "abc") == "complaint:abc"
    assert strip_prefix("complaint:abc", "complaint:") == "abc"
    assert strip_prefix("other", "complaint:") == "other"


def test_memory_store_returns_copies(store):
    record = {"id": "water", "comments": []}
    store.put("service:water", record)
    record["comments"].append("mutated after put")

    fetched = store.get("service:water")
    assert fetched == {"id": "water", "comments": []}

    fetched["comments"].append("mutated after get")
    assert store.get("service:water")["comments"] == []


def test_memory_store_get_missing_returns_none(store):
    assert store.get("complaint:missing") is None


def test_memory_store_scan_by_prefix(store):
    store.put("service:water", {"id": "water"})
    store.put("service:electricity", {"id": "electricity"})
    store.put("complaint:1", {"id": "1"})
    store.put("vote:1:alice", {"userId": "alice"})
    store.put("vote:12:alice", {"userId": "alice"})

    assert sorted(key for key, _ in store.scan("service:")) == ["service:electricity", "service:water"]
    assert [key for key, _ in store.scan("vote:1:")] == ["vote:1:alice"]


def test_memory_store_query_equality(store):
    store.put("notif:a", {"read": False})
    store.put("notif:b", {"read": True})
    store.put("notif:c", {"read": False})

    assert sorted(key for key, _ in store.query("notif:", "read", False)) == ["notif:a", "notif:c"]


def test_memory_store_delete_is_idempotent(store):
    store.put("vote:1:alice", {"direction": "up"})
    store.delete("vote:1:alice")
    store.delete("vote:1:alice")
    assert store.get("vote:1:alice") is None


def test_memory_store_persists_to_json(tmp_path):
    path = str(tmp_path / "mock_db.json")
    when = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)

    first = MemoryStore(path=path)
    first.put("complaint:1", {"id": "1", "dateSubmitted": when, "comments": []})

    reloaded = MemoryStore(path=path)
    record = reloaded.get("complaint:1")
    assert record["dateSubmitted"] == when
    assert len(reloaded.scan("")) == 1


def test_memory_store_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "mock_db.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        MemoryStore(path=str(path))


def test_keyed_lock_shares_lock_per_key():
    locks = KeyedLock()
    assert locks.get("complaint:1") is locks.get("complaint:1")
    assert locks.get("complaint:1") is not locks.get("complaint:2")


def test_store_lock_serializes_read_modify_write(store):
    store.put("service:water", {"reportsCount": 0})

    def bump():
        for _ in range(50):
            with store.lock("service:water"):
                record = store.get("service:water")
                record["reportsCount"] += 1
                store.put("service:water", record)

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.get("service:water")["reportsCount"] == 200


def test_memory_store_ping(store):
    assert store.ping() == {"backend": "memory"}


def test_split_key_maps_prefix_to_collection():
    assert split_key("complaint:abc") == ("complaints", "abc")
    assert split_key("notif:42") == ("notifications", "42")
    assert split_key("vote:abc:user-1") == ("votes", "abc:user-1")
    assert split_key("service:") == ("services", "")

    with pytest.raises(ValueError):
        split_key("no-prefix")


def _fake_doc(doc_id, data):
    doc = mock.Mock()
    doc.id = doc_id
    doc.to_dict.return_value = data
    return doc


def test_firestore_store_get_and_put():
    client = mock.MagicMock()
    snapshot = mock.Mock(exists=True)
    snapshot.to_dict.return_value = {"id": "water"}
    client.collection.return_value.document.return_value.get.return_value = snapshot

    store = FirestoreStore(client)
    assert store.get("service:water") == {"id": "water"}
    client.collection.assert_called_with("services")
    client.collection.return_value.document.assert_called_with("water")

    store.put("service:water", {"id": "water", "status": "outage"})
    client.collection.return_value.document.return_value.set.assert_called_once_with({"id": "water", "status": "outage"})


def test_firestore_store_get_missing():
    client = mock.MagicMock()
    client.collection.return_value.document.return_value.get.return_value = mock.Mock(exists=False)

    assert FirestoreStore(client).get("complaint:nope") is None


def test_firestore_store_scan_filters_by_document_prefix():
    client = mock.MagicMock()
    client.collection.return_value.stream.return_value = [
        _fake_doc("c1:alice", {"direction": "up"}),
        _fake_doc("c12:bob", {"direction": "down"}),
    ]

    rows = FirestoreStore(client).scan("vote:c1:")
    assert rows == [("vote:c1:alice", {"direction": "up"})]
    client.collection.assert_called_with("votes")


def test_firestore_store_query_uses_where():
    client = mock.MagicMock()
    query = client.collection.return_value.where.return_value
    query.stream.return_value = [_fake_doc("n1", {"read": False})]

    rows = FirestoreStore(client).query("notif:", "read", False)
    assert rows == [("notif:n1", {"read": False})]
    client.collection.return_value.where.assert_called_once_with("read", "==", False)


def test_firestore_store_wraps_api_errors():
    client = mock.MagicMock()
    client.collection.return_value.document.return_value.set.side_effect = google_exceptions.ServiceUnavailable("down")

    with pytest.raises(StorageError):
        FirestoreStore(client).put("complaint:1", {"id": "1"})
