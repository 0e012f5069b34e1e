"""
Demo data for local development.

Default services are always safe to seed (only missing ones are written).
Demo complaints go through the complaint service so they get real ids,
notifications and vote records.
"""

import logging
from typing import Dict, List

from semita.services.complaint_service import ComplaintService
from semita.services.service_status import ServiceStatusService
from semita.services.vote_service import VoteService
from semita.storage.base import COMPLAINT_PREFIX, DocumentStore

logger = logging.getLogger(__name__)


DEMO_COMPLAINTS: List[Dict] = [
    {
        "title": "Streetlight not working on Main Road",
        "category": "Infrastructure",
        "description": "The streetlight near the main gate has been flickering and went out completely yesterday night.",
        "location": "Block A - Main Gate",
        "status": "open",
        "comments": [
            ("Resident A", "I noticed this too. It makes the area unsafe at night."),
            ("Resident B", "Management should prioritize this - it's a security concern."),
        ],
        "votes": {"resident-a": "up", "resident-b": "up", "resident-c": "down"},
    },
    {
        "title": "Water pressure very low in morning hours",
        "category": "Water Supply",
        "description": "Between 6-8 AM, water pressure is extremely low on the 3rd floor. Difficult to fill buckets.",
        "location": "Block B - Floor 3",
        "status": "in-progress",
        "comments": [
            ("Resident C", "Same issue on 4th floor. Plumber is coming tomorrow."),
        ],
        "votes": {"resident-c": "up", "resident-d": "up"},
    },
    {
        "title": "Elevator making unusual noise",
        "category": "Maintenance",
        "description": "The elevator in Block C makes a grinding noise when going up. Might need immediate attention.",
        "location": "Block C - Elevator",
        "status": "resolved",
        "comments": [
            ("Maintenance Team", "Issue has been resolved. Replaced worn-out cables. Please report if you notice any further problems."),
        ],
        "votes": {"resident-a": "up"},
    },
    {
        "title": "Gym equipment needs maintenance",
        "category": "Maintenance",
        "description": "The treadmill in the community gym has been making strange noises and the elliptical is completely broken.",
        "location": "Community Gym",
        "status": "in-progress",
        "comments": [],
        "votes": {},
    },
]


def seed_demo_data(store: DocumentStore, include_complaints: bool = True) -> Dict[str, int]:
    """
    Seed default services and, when the ledger is empty, demo complaints.

    Returns:
        Counts of what was written: {"services": n, "complaints": m}
    """
    services = ServiceStatusService(store)
    created_services = services.seed_default_services()

    created_complaints = 0
    if include_complaints and not store.scan(COMPLAINT_PREFIX):
        complaints = ComplaintService(store, notifications=services.notifications)
        votes = VoteService(store)
        for demo in DEMO_COMPLAINTS:
            complaint = complaints.submit(demo["title"], demo["category"], demo["description"], demo["location"])
            for author, content in demo["comments"]:
                complaints.add_comment(complaint.id, author, content)
            for user_id, direction in demo["votes"].items():
                votes.vote(complaint.id, user_id, direction)
            if demo["status"] != "open":
                complaints.set_status(complaint.id, demo["status"])
            created_complaints += 1
    elif include_complaints:
        logger.info("Complaint ledger is not empty, skipping demo complaints")

    logger.info(f"Seeded {created_services} service(s) and {created_complaints} complaint(s)")
    return {"services": created_services, "complaints": created_complaints}
