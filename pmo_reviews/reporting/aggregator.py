"""
Groups reviews by zone or department for the summarizer.

The projection is deliberately lossy: notes and answers are truncated and only
the first few answers are kept so the prompt stays within a bounded size.
"""

from __future__ import annotations

from typing import Any, Iterable

from pmo_reviews.core.constants import (
    MAX_ANSWER_CHARS,
    MAX_ANSWERS_PER_REVIEW,
    MAX_NOTES_CHARS,
    ReportScope,
)
from pmo_reviews.core.exceptions import InvalidRequestError
from pmo_reviews.domain.review import Review
from pmo_reviews.domain.summary import ReviewDigest


def parse_scope(scope: Any) -> ReportScope:
    """
    Validate a caller-supplied scope.

    Raises:
        InvalidRequestError: If scope is not exactly ``zone`` or ``department``
    """
    if isinstance(scope, ReportScope):
        return scope
    try:
        return ReportScope(scope)
    except ValueError:
        raise InvalidRequestError("Invalid scope", field="scope") from None


def group_key(review: Review, scope: ReportScope) -> str:
    """Snapshot name the review is grouped under."""
    return review.zone_name if scope == ReportScope.ZONE else review.department_name


def digest_review(review: Review) -> ReviewDigest:
    """Bounded projection of a single review."""
    answers = [
        (a.answer or "")[:MAX_ANSWER_CHARS]
        for a in review.answers[:MAX_ANSWERS_PER_REVIEW]
    ]
    return ReviewDigest(
        day=review.day,
        date=review.review_day,
        venue=review.venue,
        reviewer_name=review.reviewer_name,
        status=review.status,
        notes=(review.overall_notes or "")[:MAX_NOTES_CHARS],
        answers=answers,
    )


def aggregate_reviews(
    reviews: Iterable[Review],
    scope: ReportScope | str,
) -> dict[str, list[ReviewDigest]]:
    """
    Bucket reviews by the scope's snapshot name.

    Args:
        reviews: Reviews in source order
        scope: ``zone`` or ``department``

    Returns:
        Mapping of group name to digests, in first-seen group order. Items keep
        the source order. Empty input gives an empty mapping.
    """
    scope = parse_scope(scope)

    groups: dict[str, list[ReviewDigest]] = {}
    for review in reviews:
        groups.setdefault(group_key(review, scope), []).append(digest_review(review))
    return groups


def build_payload(
    scope: ReportScope | str,
    groups: dict[str, list[ReviewDigest]],
) -> dict[str, Any]:
    """The DATA block embedded in the prompt."""
    scope = parse_scope(scope)
    return {
        "scope": scope.value,
        "groups": [
            {
                "name": name,
                "totalReviews": len(items),
                "items": [item.model_dump(by_alias=True) for item in items],
            }
            for name, items in groups.items()
        ],
    }
