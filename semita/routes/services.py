"""
Service status endpoints - utility status board and resident reports.
"""

import logging

from fastapi import APIRouter, Depends

from semita.models.service import InitResponse, ServiceListResponse, ServiceResponse, StatusReport
from semita.routes.dependencies import get_service_status_service
from semita.services.service_status import ServiceStatusService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=ServiceListResponse)
async def list_services(service: ServiceStatusService = Depends(get_service_status_service)):
    """Current status of every tracked service."""
    return ServiceListResponse(services=service.list_services())


@router.post("/init", response_model=InitResponse)
async def initialize_services(service: ServiceStatusService = Depends(get_service_status_service)):
    """
    Seed the default services (electricity, water, garbage, security,
    maintenance). Existing records are left untouched.
    """
    created = service.seed_default_services()
    return InitResponse(created=created, message="Default services initialized")


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, service: ServiceStatusService = Depends(get_service_status_service)):
    return ServiceResponse(service=service.get_service(service_id))


@router.post("/{service_id}/status", response_model=ServiceResponse)
async def report_service_status(
    service_id: str,
    report: StatusReport,
    service: ServiceStatusService = Depends(get_service_status_service),
):
    """
    Report a service's status.

    Unknown service ids get a default record. Every report increments
    reportsCount and emits a notification.
    """
    logger.info(f"POST /services/{service_id}/status - status={report.status}")
    updated = service.report_status(service_id, report.status, report.description, report.reported_by)
    return ServiceResponse(service=updated)
