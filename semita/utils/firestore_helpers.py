"""
Firestore query helpers shared by the Firestore storage backend.

NOTE: firebase_admin still accepts positional where() arguments. The
deprecation warning is just a warning; positional args stay the reliable path.
"""

from typing import Any


def where_filter(query, field_path: str, op_string: str, value: Any):
    """
    Apply a where() clause to a collection or query.

    Usage:
        query = where_filter(collection, "status", "==", "open")
        query = where_filter(query, "complaintId", "==", complaint_id)
    """
    return query.where(field_path, op_string, value)
