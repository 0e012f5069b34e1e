"""
Notification endpoints - feed polling and read state.

The frontend polls GET /notifications about once a minute, so listing is a
single scan with no joins.
"""

import logging

from fastapi import APIRouter, Depends, Query

from semita.models.base import SuccessResponse
from semita.models.notification import MarkAllReadResponse, NotificationListResponse
from semita.routes.dependencies import get_notification_service
from semita.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False, description="Only return unread notifications"),
    service: NotificationService = Depends(get_notification_service),
):
    """Notifications, newest first, with the current unread count."""
    return NotificationListResponse(
        notifications=service.list(unread_only=unread_only),
        unread_count=service.unread_count(),
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(service: NotificationService = Depends(get_notification_service)):
    return MarkAllReadResponse(updated=service.mark_all_read())


@router.post("/{notification_id}/read", response_model=SuccessResponse)
async def mark_read(notification_id: str, service: NotificationService = Depends(get_notification_service)):
    service.mark_read(notification_id)
    return SuccessResponse()
