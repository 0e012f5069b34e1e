"""
Complaint endpoints - submission, listing, voting and comments.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, status

from semita.models.complaint import (
    CommentCreate, CommentResponse, ComplaintCreate, ComplaintListResponse, ComplaintPageResponse,
    ComplaintResponse, ComplaintStatusUpdate, UpvoteRequest, VoteDirection,
    VoteRequest, VoteResponse,
)
from semita.routes.dependencies import get_complaint_service, get_vote_service
from semita.services.complaint_service import DEFAULT_PAGE_SIZE, ComplaintService
from semita.services.vote_service import VoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.get("", response_model=ComplaintListResponse)
async def list_complaints(
    status_filter: Optional[str] = Query(None, alias="status", description="open | in-progress | resolved"),
    user_id: Optional[str] = Header(None, alias="X-User-ID", description="Viewer identity used to fill userVote"),
    service: ComplaintService = Depends(get_complaint_service),
):
    """
    Get complaints, newest first.

    With X-User-ID, each complaint's userVote reflects that caller's vote.
    """
    if status_filter is not None:
        complaints = service.list_by_status(status_filter, viewer_id=user_id)
    else:
        complaints = service.list_complaints(viewer_id=user_id)
    return ComplaintListResponse(complaints=complaints)


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def submit_complaint(
    complaint: ComplaintCreate,
    service: ComplaintService = Depends(get_complaint_service),
):
    """
    Submit a new complaint.

    title, category and description are required; location is optional.
    """
    logger.info(f"POST /complaints - category={complaint.category}")
    created = service.submit(complaint.title, complaint.category, complaint.description, complaint.location)
    return ComplaintResponse(complaint=created)


@router.get("/page", response_model=ComplaintPageResponse)
async def list_complaints_page(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=50),
    after: Optional[str] = Query(None, description="Id of the last complaint on the previous page"),
    user_id: Optional[str] = Header(None, alias="X-User-ID"),
    service: ComplaintService = Depends(get_complaint_service),
):
    """
    Page through complaints, newest first.

    Pass the returned nextCursor as `after` to fetch the next page; it is null
    on the last page.
    """
    complaints, next_cursor = service.list_page(limit=limit, after=after, viewer_id=user_id)
    return ComplaintPageResponse(complaints=complaints, next_cursor=next_cursor)


@router.get("/{complaint_id}", response_model=ComplaintResponse)
async def get_complaint(
    complaint_id: str,
    user_id: Optional[str] = Header(None, alias="X-User-ID"),
    service: ComplaintService = Depends(get_complaint_service),
):
    return ComplaintResponse(complaint=service.get_complaint(complaint_id, viewer_id=user_id))


@router.post("/{complaint_id}/status", response_model=ComplaintResponse)
async def update_complaint_status(
    complaint_id: str,
    update: ComplaintStatusUpdate,
    service: ComplaintService = Depends(get_complaint_service),
):
    """Move a complaint to any status."""
    return ComplaintResponse(complaint=service.set_status(complaint_id, update.status))


@router.post("/{complaint_id}/vote", response_model=VoteResponse)
async def vote_on_complaint(
    complaint_id: str,
    vote: VoteRequest,
    service: VoteService = Depends(get_vote_service),
):
    """
    Vote on a complaint (up or down).

    If the user already voted with the same direction, the vote is removed (toggle).
    If the user voted with the other direction, the vote is switched.
    """
    result = service.vote(complaint_id, vote.user_id, vote.direction)
    return VoteResponse(**result.model_dump())


@router.post("/{complaint_id}/upvote", response_model=VoteResponse)
async def upvote_complaint(
    complaint_id: str,
    vote: UpvoteRequest,
    service: VoteService = Depends(get_vote_service),
):
    """
    Upvote once. Returns 409 if the user already voted on this complaint.
    """
    result = service.cast(complaint_id, vote.user_id, VoteDirection.UP)
    return VoteResponse(**result.model_dump())


@router.post("/{complaint_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    complaint_id: str,
    comment: CommentCreate,
    service: ComplaintService = Depends(get_complaint_service),
):
    """Append a comment to a complaint."""
    created = service.add_comment(complaint_id, comment.author, comment.content)
    return CommentResponse(comment=created)
