"""
Insights Service - community analytics derived on demand.

Everything is recomputed from the service and complaint collections on each
call; nothing is persisted or mutated.
"""

import logging
import math
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from semita.models.complaint import Complaint, ComplaintStatus
from semita.models.insights import DailyTrend, InsightMetrics, InsightsResponse, ServiceOutage
from semita.models.service import Service, ServiceStatus
from semita.storage.base import COMPLAINT_PREFIX, SERVICE_PREFIX, DocumentStore
from semita.utils.timestamps import as_utc, utc_now

logger = logging.getLogger(__name__)

ACTIVE_ISSUE_STATUSES = {ServiceStatus.ISSUE.value, ServiceStatus.OUTAGE.value}
UNCATEGORIZED = "Other"
TREND_DAYS = 7


def resolution_rate(resolved: int, total: int) -> int:
    """
    Percent of complaints resolved, rounded half up (12.5 -> 13).
    0 when there are no complaints.
    """
    if total <= 0:
        return 0
    return int(math.floor(100 * resolved / total + 0.5))


class InsightsService:
    """Service for read-only community analytics."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_insights(self, now: Optional[datetime] = None) -> InsightsResponse:
        services = [Service.from_record(record) for _, record in self.store.scan(SERVICE_PREFIX)]
        complaints = [Complaint.from_record(record) for _, record in self.store.scan(COMPLAINT_PREFIX)]
        services.sort(key=lambda s: s.id)

        total = len(complaints)
        status_counts = Counter(c.status for c in complaints)

        metrics = InsightMetrics(
            active_issues=sum(1 for s in services if s.status in ACTIVE_ISSUE_STATUSES),
            total_complaints=total,
            open_complaints=status_counts[ComplaintStatus.OPEN.value],
            resolution_rate=resolution_rate(status_counts[ComplaintStatus.RESOLVED.value], total),
        )

        return InsightsResponse(
            metrics=metrics,
            category_breakdown=self._category_breakdown(complaints),
            service_outages=[
                ServiceOutage(service=s.name, status=s.status, reports_count=s.reports_count)
                for s in services
            ],
            weekly_trends=self._weekly_trends(complaints, now or utc_now()),
        )

    @staticmethod
    def _category_breakdown(complaints: List[Complaint]) -> Dict[str, int]:
        breakdown: Dict[str, int] = {}
        for complaint in complaints:
            category = (complaint.category or "").strip() or UNCATEGORIZED
            breakdown[category] = breakdown.get(category, 0) + 1
        return breakdown

    @staticmethod
    def _weekly_trends(complaints: List[Complaint], now: datetime) -> List[DailyTrend]:
        """
        Submitted vs resolved counts for each of the last 7 UTC days,
        oldest first, today last.
        """
        today = as_utc(now).date()
        days = [today - timedelta(days=offset) for offset in range(TREND_DAYS - 1, -1, -1)]

        submitted = Counter()
        resolved = Counter()
        for complaint in complaints:
            submitted_at = as_utc(complaint.date_submitted)
            if submitted_at is not None:
                submitted[submitted_at.date()] += 1
            resolved_at = as_utc(complaint.resolved_at)
            if resolved_at is not None and complaint.status == ComplaintStatus.RESOLVED.value:
                resolved[resolved_at.date()] += 1

        return [
            DailyTrend(
                day=day.strftime("%a"),
                date=day.isoformat(),
                issues=submitted[day],
                resolved=resolved[day],
            )
            for day in days
        ]
