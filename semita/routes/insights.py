"""
Community insights endpoint.

A SNAPSHOT recomputed on every request: counts, rates and per-category
breakdowns only. No forecasting, no stored aggregates.
"""

from fastapi import APIRouter, Depends

from semita.models.insights import InsightsResponse
from semita.routes.dependencies import get_insights_service
from semita.services.insights_service import InsightsService

router = APIRouter(prefix="/insights", tags=["Insights"])


@router.get("", response_model=InsightsResponse)
async def get_insights(service: InsightsService = Depends(get_insights_service)):
    return service.get_insights()
