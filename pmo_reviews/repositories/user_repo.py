"""
User repository.
"""

from __future__ import annotations

from typing import Any

from pmo_reviews.domain.user import User
from pmo_reviews.repositories.base import InMemoryRepository
from pmo_reviews.repositories.database import PostgresRepository


class InMemoryUserRepository(InMemoryRepository[User]):
    collection = "users"

    def sort_key(self, entity: User) -> Any:
        return entity.email


class PostgresUserRepository(PostgresRepository[User]):
    collection = "users"
    model = User
    order_by = "data->>'email' ASC"

    def _to_document(self, entity: User) -> dict[str, Any]:
        # password_hash is excluded from normal serialization
        return {**super()._to_document(entity), "passwordHash": entity.password_hash}
