"""
Pydantic models for the notification feed.
"""

from pydantic import Field
from datetime import datetime
from typing import List, Optional
from enum import Enum

from semita.models.base import CamelModel, SuccessResponse


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ALERT = "alert"


class Notification(CamelModel):
    """
    System-generated alert shown to every viewer.
    Only the read flag ever changes after creation.
    """
    id: str
    type: NotificationType = NotificationType.INFO
    title: str
    message: str = ""
    timestamp: datetime
    read: bool = False
    service_id: Optional[str] = None
    complaint_id: Optional[str] = None


class NotificationListResponse(CamelModel):
    notifications: List[Notification]
    unread_count: int = 0


class MarkAllReadResponse(SuccessResponse):
    updated: int = Field(0, description="Number of notifications flipped to read")
