"""
Repositories for zones, departments and questions.
"""

from __future__ import annotations

from typing import Any

from pmo_reviews.domain.reference import Department, Question, Zone
from pmo_reviews.repositories.base import InMemoryRepository
from pmo_reviews.repositories.database import PostgresRepository


class InMemoryZoneRepository(InMemoryRepository[Zone]):
    """Zones ordered by name."""

    collection = "zones"

    def sort_key(self, entity: Zone) -> Any:
        return entity.name


class InMemoryDepartmentRepository(InMemoryRepository[Department]):
    """Departments ordered by name."""

    collection = "departments"

    def sort_key(self, entity: Department) -> Any:
        return entity.name


class InMemoryQuestionRepository(InMemoryRepository[Question]):
    """Questions ordered by display order, then creation time."""

    collection = "questions"

    def sort_key(self, entity: Question) -> Any:
        return (entity.order, entity.created_at)


class PostgresZoneRepository(PostgresRepository[Zone]):
    collection = "zones"
    model = Zone
    order_by = "data->>'name' ASC"


class PostgresDepartmentRepository(PostgresRepository[Department]):
    collection = "departments"
    model = Department
    order_by = "data->>'name' ASC"


class PostgresQuestionRepository(PostgresRepository[Question]):
    collection = "questions"
    model = Question
    order_by = "(data->>'order')::int ASC, created_at ASC"
