"""
Notification Service - append-only alert feed.

Notifications are only created as a side effect of service status reports
and complaint activity; clients can list them and flip the read flag.
"""

import logging
import uuid
from typing import List, Optional

from semita.core.errors import NotFound
from semita.models.notification import Notification, NotificationType
from semita.storage.base import NOTIFICATION_PREFIX, DocumentStore, make_key
from semita.utils.timestamps import as_utc, utc_now

logger = logging.getLogger(__name__)


def _sort_key(notification: Notification):
    return as_utc(notification.timestamp), notification.id


class NotificationService:
    """Service for the notification feed."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(
        self,
        type: NotificationType,
        title: str,
        message: str,
        service_id: Optional[str] = None,
        complaint_id: Optional[str] = None,
    ) -> Notification:
        """
        Append a new unread notification.

        Internal only: called by the service status tracker and the complaint
        ledger, never exposed over HTTP.
        """
        notification = Notification(
            id=uuid.uuid4().hex,
            type=type,
            title=title,
            message=message,
            timestamp=utc_now(),
            read=False,
            service_id=service_id,
            complaint_id=complaint_id,
        )
        self.store.put(make_key(NOTIFICATION_PREFIX, notification.id), notification.to_record())
        logger.info(f"Notification {notification.id} ({notification.type}): {title}")
        return notification

    def list(self, unread_only: bool = False) -> List[Notification]:
        """All notifications, newest first."""
        notifications = [Notification.from_record(record) for _, record in self.store.scan(NOTIFICATION_PREFIX)]
        if unread_only:
            notifications = [n for n in notifications if not n.read]
        notifications.sort(key=_sort_key, reverse=True)
        return notifications

    def unread_count(self) -> int:
        return len(self.store.query(NOTIFICATION_PREFIX, "read", False))

    def mark_read(self, notification_id: str) -> Notification:
        """
        Flip a single notification to read (idempotent).

        Raises:
            NotFound: no notification with this id
        """
        key = make_key(NOTIFICATION_PREFIX, notification_id)
        with self.store.lock(key):
            record = self.store.get(key)
            if record is None:
                raise NotFound(f"Notification {notification_id} not found")
            if not record.get("read"):
                record["read"] = True
                self.store.put(key, record)
        return Notification.from_record(record)

    def mark_all_read(self) -> int:
        """
        Mark every notification read.

        Returns:
            Number of notifications that were unread before the call
        """
        updated = 0
        for key, _ in self.store.query(NOTIFICATION_PREFIX, "read", False):
            with self.store.lock(key):
                record = self.store.get(key)
                if record is None or record.get("read"):
                    continue
                record["read"] = True
                self.store.put(key, record)
                updated += 1
        if updated:
            logger.info(f"Marked {updated} notification(s) read")
        return updated
