"""
FastAPI dependency providers.

Services are cheap to build, so one is created per request on top of the
shared store. Tests swap the backend with:

    app.dependency_overrides[get_store] = lambda: MemoryStore()
"""

from fastapi import Depends

from semita.config.storage import get_store
from semita.services.complaint_service import ComplaintService
from semita.services.insights_service import InsightsService
from semita.services.notification_service import NotificationService
from semita.services.service_status import ServiceStatusService
from semita.services.vote_service import VoteService
from semita.storage.base import DocumentStore


def get_notification_service(store: DocumentStore = Depends(get_store)) -> NotificationService:
    return NotificationService(store)


def get_service_status_service(store: DocumentStore = Depends(get_store)) -> ServiceStatusService:
    return ServiceStatusService(store)


def get_vote_service(store: DocumentStore = Depends(get_store)) -> VoteService:
    return VoteService(store)


def get_complaint_service(store: DocumentStore = Depends(get_store)) -> ComplaintService:
    return ComplaintService(store)


def get_insights_service(store: DocumentStore = Depends(get_store)) -> InsightsService:
    return InsightsService(store)
