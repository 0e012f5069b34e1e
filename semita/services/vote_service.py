"""
Vote Service - Handle voting (up/down) on complaints.

One vote record per (complaint, user), keyed vote:<complaint_id>:<user_id>.
Counters live on the complaint record and are written before the vote record,
in the same locked section; a failed vote write puts the counters back.
"""

import logging
from typing import Dict, Optional

from semita.core.errors import Conflict, InvalidArgument, NotFound, StorageError
from semita.models.complaint import VoteDirection, VoteResult
from semita.storage.base import COMPLAINT_PREFIX, VOTE_PREFIX, DocumentStore, make_key, strip_prefix
from semita.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

COUNTER_FIELDS = {
    VoteDirection.UP.value: "upvotes",
    VoteDirection.DOWN.value: "downvotes",
}


def _parse_direction(direction) -> str:
    try:
        return VoteDirection(direction).value
    except ValueError:
        raise InvalidArgument(f"Invalid vote direction '{direction}'. Expected 'up' or 'down'")


def _normalize_user(user_id: Optional[str]) -> Optional[str]:
    if user_id is None:
        return None
    return user_id.strip() or None


def _require_user(user_id: Optional[str]) -> str:
    user_id = _normalize_user(user_id)
    if not user_id:
        raise InvalidArgument("userId is required to vote")
    if "/" in user_id:
        raise InvalidArgument("userId must not contain '/'")
    return user_id


class VoteService:
    """Service for managing votes on complaints."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def vote(self, complaint_id: str, user_id: str, direction) -> VoteResult:
        """
        Toggle vote.

        - same direction as the existing vote: the vote is removed
        - opposite direction: the vote switches, one counter moves to the other
        - no existing vote: a new vote is recorded

        Raises:
            NotFound: complaint does not exist
            InvalidArgument: missing user id or unknown direction
        """
        return self._apply(complaint_id, user_id, direction, toggle=True)

    def cast(self, complaint_id: str, user_id: str, direction=VoteDirection.UP) -> VoteResult:
        """
        Non-toggling vote: record a vote only if the user has none yet.

        Raises:
            Conflict: the user already voted on this complaint
        """
        return self._apply(complaint_id, user_id, direction, toggle=False)

    def _apply(self, complaint_id: str, user_id: str, direction, toggle: bool) -> VoteResult:
        direction = _parse_direction(direction)
        user_id = _require_user(user_id)

        complaint_key = make_key(COMPLAINT_PREFIX, complaint_id)
        vote_key = make_key(VOTE_PREFIX, complaint_id, user_id)

        with self.store.lock(complaint_key):
            complaint = self.store.get(complaint_key)
            if complaint is None:
                raise NotFound(f"Complaint {complaint_id} not found")

            counts = {field: int(complaint.get(field) or 0) for field in COUNTER_FIELDS.values()}
            existing = self.store.get(vote_key)
            previous = existing.get("direction") if existing else None

            if previous is not None and not toggle:
                raise Conflict(f"User {user_id} already voted on complaint {complaint_id}")

            if previous == direction:
                counts[COUNTER_FIELDS[direction]] -= 1
                user_vote = None
                action = "removed"
            else:
                if previous is not None:
                    counts[COUNTER_FIELDS[previous]] -= 1
                    action = "updated"
                else:
                    action = "created"
                counts[COUNTER_FIELDS[direction]] += 1
                user_vote = direction

            # Counters never go negative, even if a stale record slipped through
            for field in counts:
                counts[field] = max(0, counts[field])

            # Counters first: a failed counter write leaves nothing behind
            original = dict(complaint)
            complaint.update(counts)
            self.store.put(complaint_key, complaint)
            try:
                if user_vote is None:
                    self.store.delete(vote_key)
                else:
                    self.store.put(vote_key, {
                        "complaintId": complaint_id,
                        "userId": user_id,
                        "direction": user_vote,
                        "timestamp": utc_now(),
                    })
            except StorageError:
                logger.error(f"Vote record write failed for complaint {complaint_id}, restoring counters")
                self.store.put(complaint_key, original)
                raise

        logger.info(f"Vote {action} on complaint {complaint_id} by {user_id}: up={counts['upvotes']} down={counts['downvotes']}")

        return VoteResult(
            complaint_id=complaint_id,
            upvotes=counts["upvotes"],
            downvotes=counts["downvotes"],
            user_vote=user_vote,
            action=action,
        )

    def get_user_vote(self, complaint_id: str, user_id: Optional[str]) -> Optional[str]:
        """The user's current direction on a complaint, or None."""
        user_id = _normalize_user(user_id)
        if not user_id:
            return None
        record = self.store.get(make_key(VOTE_PREFIX, complaint_id, user_id))
        return record.get("direction") if record else None

    def get_user_votes(self, user_id: Optional[str]) -> Dict[str, str]:
        """Map of complaint id -> direction for every vote cast by the user."""
        user_id = _normalize_user(user_id)
        if not user_id:
            return {}
        return {
            record.get("complaintId") or strip_prefix(key, VOTE_PREFIX).rsplit(":", 1)[0]: record.get("direction")
            for key, record in self.store.query(VOTE_PREFIX, "userId", user_id)
        }
