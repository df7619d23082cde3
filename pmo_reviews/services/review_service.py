"""
Review service for recording and editing site-visit reviews.
"""

from __future__ import annotations

from typing import Any, Optional

from pmo_reviews.core.constants import ReviewStatus
from pmo_reviews.core.exceptions import ReviewNotFoundError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.core.security import generate_id
from pmo_reviews.domain.review import Review
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.repositories.base import BaseRepository
from pmo_reviews.services.reference_service import ReferenceService

logger = get_logger(__name__)


class ReviewService:
    """
    Service for the review lifecycle.

    Zone and department names are copied onto the review when it is written.
    The reviewer is always the authenticated caller.
    """

    def __init__(
        self,
        review_repository: BaseRepository[Review],
        reference_service: ReferenceService,
    ) -> None:
        """
        Initialize the review service.

        Args:
            review_repository: Repository for review storage
            reference_service: Used to resolve zone/department snapshots
        """
        self.review_repository = review_repository
        self.reference_service = reference_service

    async def _snapshot_names(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Copy current zone/department names for any ids present in ``fields``."""
        snapshot: dict[str, Any] = {}
        if fields.get("zone_id"):
            zone = await self.reference_service.get_zone(fields["zone_id"])
            snapshot["zone_name"] = zone.name
        if fields.get("department_id"):
            department = await self.reference_service.get_department(fields["department_id"])
            snapshot["department_name"] = department.name
        return snapshot

    async def list_reviews(
        self,
        status: Optional[ReviewStatus] = None,
        zone_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> list[Review]:
        """
        List reviews, most recent review date first.
        """
        filters: dict[str, Any] = {}
        if status:
            filters["status"] = status
        if zone_id:
            filters["zone_id"] = zone_id
        if department_id:
            filters["department_id"] = department_id
        return await self.review_repository.list(filters=filters or None)

    async def get_review(self, review_id: str) -> Review:
        review = await self.review_repository.get(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    async def create_review(self, fields: dict[str, Any], reviewer: CurrentUser) -> Review:
        """
        Record a new review.

        Args:
            fields: Review fields (snake_case), including ``zone_id`` and ``department_id``
            reviewer: Authenticated caller, recorded as the reviewer

        Returns:
            The stored review
        """
        data = {
            **fields,
            **await self._snapshot_names(fields),
            "id": generate_id("review"),
            "reviewed_by": reviewer.id,
            "reviewer_name": reviewer.name,
        }
        review = Review.model_validate(data)
        await self.review_repository.save(review)

        logger.info(
            "Review created",
            review_id=review.id,
            zone=review.zone_name,
            department=review.department_name,
            status=review.status,
        )
        return review

    async def update_review(self, review_id: str, changes: dict[str, Any]) -> Review:
        """
        Apply a partial update. Changing the zone or department re-copies its name.
        """
        review = await self.get_review(review_id)

        changes = {k: v for k, v in changes.items() if k not in ("reviewed_by", "reviewer_name")}
        moved = {
            key: changes[key]
            for key in ("zone_id", "department_id")
            if changes.get(key) and changes[key] != getattr(review, key)
        }
        changes.update(await self._snapshot_names(moved))

        updated = Review.model_validate({**review.model_dump(), **changes})
        await self.review_repository.save(updated)

        logger.info("Review updated", review_id=review_id, fields=sorted(changes))
        return updated

    async def delete_review(self, review_id: str) -> None:
        if not await self.review_repository.delete(review_id):
            raise ReviewNotFoundError(review_id)
        logger.info("Review deleted", review_id=review_id)

    async def all_reviews(self) -> list[Review]:
        """Every review, most recent first, for in-memory aggregation."""
        return await self.review_repository.list()
