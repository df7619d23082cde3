"""
Review endpoints.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from pmo_reviews.api.deps import get_current_user, get_review_service, require_admin, require_writer
from pmo_reviews.api.v1.common import MessageResponse
from pmo_reviews.core.constants import ReviewStatus
from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.review import Review, ReviewAnswer
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.services.review_service import ReviewService

logger = get_logger(__name__)

router = APIRouter()


class ReviewCreateRequest(CamelModel):
    """
    Request to record a review.

    Zone/department names and the reviewer are filled in by the server.
    """

    zone_id: str
    department_id: str
    review_date: datetime
    day: str
    venue: str
    aamil: Optional[str] = None
    zonal_head: Optional[str] = None
    zone_capacity: Optional[int] = Field(default=None, ge=0)
    mumineen_count: Optional[int] = Field(default=None, ge=0)
    thaal_count: Optional[int] = Field(default=None, ge=0)
    answers: list[ReviewAnswer] = Field(default_factory=list)
    overall_notes: Optional[str] = None
    status: ReviewStatus = ReviewStatus.DRAFT


class ReviewUpdateRequest(CamelModel):
    """Partial review update; only fields present in the body change."""

    zone_id: Optional[str] = None
    department_id: Optional[str] = None
    review_date: Optional[datetime] = None
    day: Optional[str] = None
    venue: Optional[str] = None
    aamil: Optional[str] = None
    zonal_head: Optional[str] = None
    zone_capacity: Optional[int] = Field(default=None, ge=0)
    mumineen_count: Optional[int] = Field(default=None, ge=0)
    thaal_count: Optional[int] = Field(default=None, ge=0)
    answers: Optional[list[ReviewAnswer]] = None
    overall_notes: Optional[str] = None
    status: Optional[ReviewStatus] = None


@router.get("/reviews", response_model=list[Review])
async def list_reviews(
    status_filter: Optional[ReviewStatus] = Query(default=None, alias="status"),
    zone_id: Optional[str] = Query(default=None, alias="zoneId"),
    department_id: Optional[str] = Query(default=None, alias="departmentId"),
    _: CurrentUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> list[Review]:
    """List reviews, most recent review date first."""
    return await service.list_reviews(
        status=status_filter,
        zone_id=zone_id,
        department_id=department_id,
    )


@router.post("/reviews", response_model=Review, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: ReviewCreateRequest,
    user: CurrentUser = Depends(require_writer),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    logger.info("Recording review", reviewer_id=user.id, zone_id=request.zone_id)
    return await service.create_review(request.model_dump(), reviewer=user)


@router.get("/reviews/{review_id}", response_model=Review)
async def get_review(
    review_id: str,
    _: CurrentUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    return await service.get_review(review_id)


@router.put("/reviews/{review_id}", response_model=Review)
async def update_review(
    review_id: str,
    request: ReviewUpdateRequest,
    _: CurrentUser = Depends(require_writer),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    return await service.update_review(review_id, request.model_dump(exclude_unset=True))


@router.delete("/reviews/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: ReviewService = Depends(get_review_service),
) -> MessageResponse:
    """Hard-delete a review (admin only)."""
    logger.info("Deleting review", review_id=review_id, admin_id=admin.id)
    await service.delete_review(review_id)
    return MessageResponse(message="Review deleted successfully")
