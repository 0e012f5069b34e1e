"""
Pydantic models for complaints, comments and votes.
"""

from pydantic import Field
from datetime import datetime
from typing import List, Optional
from enum import Enum

from semita.models.base import CamelModel, SuccessResponse


class ComplaintStatus(str, Enum):
    """
    Complaint lifecycle.
    Any status can move to any other; there is no enforced order.
    """
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class Comment(CamelModel):
    """Comment embedded in its parent complaint. Immutable once appended."""
    id: str
    author: str
    content: str
    timestamp: datetime


class Complaint(CamelModel):
    """
    Resident-submitted issue report.

    user_vote is never stored; it is filled per viewer from vote records.
    """
    id: str
    title: str
    category: str = ""
    description: str
    location: Optional[str] = None
    status: ComplaintStatus = ComplaintStatus.OPEN
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    user_vote: Optional[VoteDirection] = None
    date_submitted: datetime
    resolved_at: Optional[datetime] = None
    comments: List[Comment] = Field(default_factory=list)


class ComplaintCreate(CamelModel):
    """
    Body of POST /complaints.
    Required fields are checked for blankness by the complaint service so the
    caller gets a 400 with a readable message.
    """
    title: str = Field("", max_length=200)
    category: str = Field("", max_length=100)
    description: str = Field("", max_length=2000)
    location: Optional[str] = Field(None, max_length=200)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Leak",
                "category": "Water Supply",
                "description": "Pipe burst",
                "location": "Block A",
            }
        }


class ComplaintStatusUpdate(CamelModel):
    status: ComplaintStatus


class CommentCreate(CamelModel):
    author: Optional[str] = Field(None, max_length=100)
    content: str = Field("", max_length=1000)


class VoteRequest(CamelModel):
    user_id: str = Field(..., max_length=128, description="Caller identity used to track the vote")
    direction: VoteDirection


class UpvoteRequest(CamelModel):
    user_id: str = Field(..., max_length=128)


class VoteResult(CamelModel):
    """Authoritative counts after a vote."""
    complaint_id: str
    upvotes: int
    downvotes: int
    user_vote: Optional[VoteDirection] = None
    action: str = Field(..., description="created | updated | removed")


class ComplaintListResponse(CamelModel):
    complaints: List[Complaint]


class ComplaintPageResponse(CamelModel):
    complaints: List[Complaint]
    next_cursor: Optional[str] = None


class ComplaintResponse(SuccessResponse):
    complaint: Complaint


class CommentResponse(SuccessResponse):
    comment: Comment


class VoteResponse(SuccessResponse, VoteResult):
    pass
