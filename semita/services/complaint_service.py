"""
Complaint Service - resident complaints, their comments and status.

Comments are embedded in the complaint record in append order and are never
edited or removed. Status can move freely between open, in-progress and
resolved.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from semita.core.errors import InvalidArgument, NotFound
from semita.models.complaint import Comment, Complaint, ComplaintStatus
from semita.models.notification import NotificationType
from semita.services.notification_service import NotificationService
from semita.services.vote_service import VoteService
from semita.storage.base import COMPLAINT_PREFIX, DocumentStore, make_key
from semita.utils.timestamps import as_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


def _parse_status(status) -> ComplaintStatus:
    try:
        return ComplaintStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in ComplaintStatus)
        raise InvalidArgument(f"Invalid complaint status '{status}'. Expected one of: {allowed}")


def _require(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgument(f"{field} is required")
    return value.strip()


class ComplaintService:
    """Service for the complaint ledger."""

    def __init__(
        self,
        store: DocumentStore,
        notifications: NotificationService = None,
        votes: VoteService = None,
    ):
        self.store = store
        self.notifications = notifications or NotificationService(store)
        self.votes = votes or VoteService(store)

    def _prepare(self, records, viewer_id: Optional[str] = None) -> List[Complaint]:
        complaints = [Complaint.from_record(record) for _, record in records]
        if viewer_id:
            user_votes = self.votes.get_user_votes(viewer_id)
            for complaint in complaints:
                complaint.user_vote = user_votes.get(complaint.id)
        complaints.sort(key=lambda c: (as_utc(c.date_submitted), c.id), reverse=True)
        return complaints

    def list_complaints(self, viewer_id: Optional[str] = None) -> List[Complaint]:
        """
        All complaints, newest first.

        Args:
            viewer_id: when given, each complaint's user_vote reflects this caller's vote
        """
        return self._prepare(self.store.scan(COMPLAINT_PREFIX), viewer_id)

    def list_by_status(self, status, viewer_id: Optional[str] = None) -> List[Complaint]:
        """
        Complaints with the given status, newest first.

        Raises:
            InvalidArgument: unknown status
        """
        wanted = _parse_status(status).value
        return self._prepare(self.store.query(COMPLAINT_PREFIX, "status", wanted), viewer_id)

    def list_page(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        after: Optional[str] = None,
        viewer_id: Optional[str] = None,
    ) -> Tuple[List[Complaint], Optional[str]]:
        """
        One page of complaints, newest first.

        Args:
            limit: page size, at least 1
            after: id of the last complaint of the previous page
            viewer_id: fills user_vote as in list_complaints

        Returns:
            (complaints, next_cursor); next_cursor is None on the last page

        Raises:
            InvalidArgument: limit below 1 or unknown cursor
        """
        if limit < 1:
            raise InvalidArgument("limit must be at least 1")

        complaints = self.list_complaints(viewer_id)
        start = 0
        if after:
            ids = [c.id for c in complaints]
            if after not in ids:
                raise InvalidArgument(f"Unknown cursor '{after}'")
            start = ids.index(after) + 1

        page = complaints[start:start + limit]
        next_cursor = page[-1].id if page and start + limit < len(complaints) else None
        return page, next_cursor

    def get_complaint(self, complaint_id: str, viewer_id: Optional[str] = None) -> Complaint:
        record = self.store.get(make_key(COMPLAINT_PREFIX, complaint_id))
        if record is None:
            raise NotFound(f"Complaint {complaint_id} not found")
        complaint = Complaint.from_record(record)
        if viewer_id:
            complaint.user_vote = self.votes.get_user_vote(complaint_id, viewer_id)
        return complaint

    def submit(self, title: str, category: str, description: str, location: Optional[str] = None) -> Complaint:
        """
        File a new complaint.

        Validation happens before any write, so a rejected submission leaves
        the ledger untouched.

        Raises:
            InvalidArgument: blank title, category or description
        """
        title = _require(title, "title")
        category = _require(category, "category")
        description = _require(description, "description")
        location = location.strip() if location and location.strip() else None

        complaint = Complaint(
            id=uuid.uuid4().hex,
            title=title,
            category=category,
            description=description,
            location=location,
            status=ComplaintStatus.OPEN,
            upvotes=0,
            downvotes=0,
            date_submitted=utc_now(),
            comments=[],
        )
        self.store.put(make_key(COMPLAINT_PREFIX, complaint.id), complaint.to_record(exclude={"user_vote"}))
        logger.info(f"Complaint {complaint.id} submitted: {title} [{category}]")

        self.notifications.create(
            type=NotificationType.INFO,
            title="New Complaint Submitted",
            message=f"{title} - {category}",
            complaint_id=complaint.id,
        )
        return complaint

    def add_comment(self, complaint_id: str, author: Optional[str], content: str) -> Comment:
        """
        Append a comment to a complaint.

        Comment ids are "<complaint_id>-<n>" with n the 1-based position,
        unique within the complaint since comments are never removed.

        Raises:
            NotFound: complaint does not exist
            InvalidArgument: blank content
        """
        key = make_key(COMPLAINT_PREFIX, complaint_id)
        with self.store.lock(key):
            record = self.store.get(key)
            if record is None:
                raise NotFound(f"Complaint {complaint_id} not found")
            content = _require(content, "content")

            comments = record.get("comments") or []
            comment = Comment(
                id=f"{complaint_id}-{len(comments) + 1}",
                author=author.strip() if author and author.strip() else "Anonymous",
                content=content,
                timestamp=utc_now(),
            )
            comments.append(comment.to_record())
            record["comments"] = comments
            self.store.put(key, record)

        logger.info(f"Comment {comment.id} added by {comment.author}")
        return comment

    def set_status(self, complaint_id: str, status) -> Complaint:
        """
        Move a complaint to any status.

        Moving into resolved stamps resolvedAt and emits a success
        notification; leaving resolved clears the stamp.

        Raises:
            NotFound: complaint does not exist
            InvalidArgument: unknown status
        """
        new_status = _parse_status(status).value
        key = make_key(COMPLAINT_PREFIX, complaint_id)
        with self.store.lock(key):
            record = self.store.get(key)
            if record is None:
                raise NotFound(f"Complaint {complaint_id} not found")
            previous = record.get("status")
            record["status"] = new_status
            if new_status == ComplaintStatus.RESOLVED.value:
                if previous != new_status:
                    record["resolvedAt"] = utc_now()
            else:
                record["resolvedAt"] = None
            self.store.put(key, record)
            complaint = Complaint.from_record(record)

        if previous != new_status:
            logger.info(f"Complaint {complaint_id} status {previous} -> {new_status}")
            if new_status == ComplaintStatus.RESOLVED.value:
                self.notifications.create(
                    type=NotificationType.SUCCESS,
                    title="Complaint Resolved",
                    message=f"{complaint.title} has been marked as resolved",
                    complaint_id=complaint_id,
                )
        return complaint
