"""
Review domain model.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from pmo_reviews.core.constants import ReviewStatus
from pmo_reviews.domain.base import CamelModel, Entity, as_utc


class ReviewAnswer(CamelModel):
    """One answered question, embedded in its review."""

    question_id: str
    question_text: str = Field(..., description="Question text snapshot")
    answer: str
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class Review(Entity):
    """
    A site-visit review for one zone and department.

    ``zone_name``, ``department_name`` and ``reviewer_name`` are snapshots copied
    at write time. Reports group on these snapshots, never on a live lookup.
    """

    zone_id: str
    zone_name: str
    department_id: str
    department_name: str

    review_date: datetime
    day: str
    venue: str

    aamil: Optional[str] = None
    zonal_head: Optional[str] = None
    zone_capacity: Optional[int] = Field(default=None, ge=0)
    mumineen_count: Optional[int] = Field(default=None, ge=0)
    thaal_count: Optional[int] = Field(default=None, ge=0)

    reviewed_by: str
    reviewer_name: str

    answers: list[ReviewAnswer] = Field(default_factory=list)
    overall_notes: Optional[str] = None
    status: ReviewStatus = Field(default=ReviewStatus.DRAFT)

    @field_validator("review_date")
    @classmethod
    def normalize_review_date(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def review_day(self) -> str:
        """ISO date portion of the review date (UTC)."""
        return self.review_date.date().isoformat()
