"""
Service Status Tracker - current status of community utilities.

Every resident report overwrites the status, bumps reportsCount and emits a
notification whose type follows the reported severity.
"""

import logging
from typing import Dict, List

from semita.core.errors import InvalidArgument, NotFound
from semita.models.notification import NotificationType
from semita.models.service import Service, ServiceStatus
from semita.services.notification_service import NotificationService
from semita.storage.base import SERVICE_PREFIX, DocumentStore, make_key
from semita.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


DEFAULT_SERVICES: List[Dict] = [
    {
        "id": "electricity",
        "name": "Electricity",
        "description": "Power supply is stable across all blocks",
        "icon": "Zap",
    },
    {
        "id": "water",
        "name": "Water Supply",
        "description": "Water supply is normal",
        "icon": "Droplets",
    },
    {
        "id": "garbage",
        "name": "Garbage Collection",
        "description": "Collection schedule is on track",
        "icon": "Trash2",
    },
    {
        "id": "security",
        "name": "Security",
        "description": "All security measures are operational",
        "icon": "Shield",
    },
    {
        "id": "maintenance",
        "name": "Maintenance",
        "description": "No ongoing maintenance issues",
        "icon": "Wrench",
    },
]

NOTIFICATION_TYPE_BY_STATUS = {
    ServiceStatus.OUTAGE.value: NotificationType.ALERT,
    ServiceStatus.ISSUE.value: NotificationType.WARNING,
}


def _parse_status(status) -> ServiceStatus:
    try:
        return ServiceStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in ServiceStatus)
        raise InvalidArgument(f"Invalid service status '{status}'. Expected one of: {allowed}")


class ServiceStatusService:
    """Service for reading and reporting utility status."""

    def __init__(self, store: DocumentStore, notifications: NotificationService = None):
        self.store = store
        self.notifications = notifications or NotificationService(store)

    def list_services(self) -> List[Service]:
        services = [Service.from_record(record) for _, record in self.store.scan(SERVICE_PREFIX)]
        services.sort(key=lambda s: s.id)
        return services

    def get_service(self, service_id: str) -> Service:
        record = self.store.get(make_key(SERVICE_PREFIX, service_id))
        if record is None:
            raise NotFound(f"Service {service_id} not found")
        return Service.from_record(record)

    def report_status(self, service_id: str, status, description: str, reported_by: str) -> Service:
        """
        Record a resident status report.

        Creates a default shell for unknown service ids, overwrites
        status/description, increments reportsCount and emits a notification
        (alert for outage, warning for issue, info otherwise).

        Raises:
            InvalidArgument: empty service id or unknown status
            StorageError: the store failed
        """
        if not service_id or not service_id.strip():
            raise InvalidArgument("Service id is required")
        new_status = _parse_status(status)

        key = make_key(SERVICE_PREFIX, service_id)
        with self.store.lock(key):
            record = self.store.get(key) or {
                "id": service_id,
                "name": service_id,
                "reportsCount": 0,
                "icon": "default",
            }
            record.update({
                "id": service_id,
                "status": new_status.value,
                "description": description or "",
                "lastUpdate": utc_now(),
                "reportsCount": max(0, int(record.get("reportsCount") or 0)) + 1,
                "reportedBy": reported_by or "Anonymous",
            })
            service = Service.from_record(record)
            self.store.put(key, service.to_record())

        logger.info(f"Service {service_id} reported as {new_status.value} by {service.reported_by} (reports={service.reports_count})")

        self.notifications.create(
            type=NOTIFICATION_TYPE_BY_STATUS.get(new_status.value, NotificationType.INFO),
            title=f"{service.name} Status Update",
            message=service.description,
            service_id=service_id,
        )
        return service

    def seed_default_services(self) -> int:
        """
        Write each default service that is not already stored.

        Returns:
            Number of services created
        """
        created = 0
        for default in DEFAULT_SERVICES:
            key = make_key(SERVICE_PREFIX, default["id"])
            with self.store.lock(key):
                if self.store.get(key) is not None:
                    continue
                service = Service(
                    status=ServiceStatus.ACTIVE,
                    last_update=utc_now(),
                    reports_count=0,
                    **default,
                )
                self.store.put(key, service.to_record())
                created += 1
        if created:
            logger.info(f"Seeded {created} default service(s)")
        return created
