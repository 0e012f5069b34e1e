"""
Pydantic models for tracked community services.
"""

from pydantic import Field
from datetime import datetime
from typing import List, Optional
from enum import Enum

from semita.models.base import CamelModel, SuccessResponse


class ServiceStatus(str, Enum):
    """Current state of a service as last reported by residents."""
    ACTIVE = "active"
    ISSUE = "issue"
    OUTAGE = "outage"
    MAINTENANCE = "maintenance"


class Service(CamelModel):
    """A tracked utility (electricity, water...) and its current status."""
    id: str
    name: str
    status: ServiceStatus = ServiceStatus.ACTIVE
    description: str = ""
    last_update: Optional[datetime] = None
    reports_count: int = Field(default=0, ge=0)
    icon: str = "default"
    reported_by: Optional[str] = None


class StatusReport(CamelModel):
    """Body of POST /services/{id}/status."""
    status: ServiceStatus
    description: str = Field("", max_length=500, description="What the resident observed")
    reported_by: str = Field("Anonymous", max_length=100)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "outage",
                "description": "Main line burst near Block A",
                "reportedBy": "resident1",
            }
        }


class ServiceListResponse(CamelModel):
    services: List[Service]


class ServiceResponse(SuccessResponse):
    service: Service


class InitResponse(SuccessResponse):
    created: int = 0
