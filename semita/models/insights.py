"""
Response models for community insights.
"""

from pydantic import Field
from typing import Dict, List

from semita.models.base import CamelModel


class InsightMetrics(CamelModel):
    active_issues: int = 0
    total_complaints: int = 0
    open_complaints: int = 0
    resolution_rate: int = Field(0, ge=0, le=100, description="Percent of complaints resolved")


class ServiceOutage(CamelModel):
    service: str
    status: str
    reports_count: int = 0


class DailyTrend(CamelModel):
    day: str  # "Mon"
    date: str  # "2024-01-15"
    issues: int = 0
    resolved: int = 0


class InsightsResponse(CamelModel):
    metrics: InsightMetrics
    category_breakdown: Dict[str, int] = Field(default_factory=dict)
    service_outages: List[ServiceOutage] = Field(default_factory=list)
    weekly_trends: List[DailyTrend] = Field(default_factory=list)
