"""
Review repository. Reviews list most recent ``review_date`` first.
"""

from __future__ import annotations

from typing import Any

from pmo_reviews.domain.review import Review
from pmo_reviews.repositories.base import InMemoryRepository
from pmo_reviews.repositories.database import PostgresRepository


class InMemoryReviewRepository(InMemoryRepository[Review]):
    """
    In-memory review repository for development/testing.
    """

    collection = "reviews"
    sort_descending = True

    def sort_key(self, entity: Review) -> Any:
        return (entity.review_date, entity.created_at)


class PostgresReviewRepository(PostgresRepository[Review]):
    """
    PostgreSQL review repository for production.
    """

    collection = "reviews"
    model = Review
    order_by = "(data->>'reviewDate')::timestamptz DESC, created_at DESC"
