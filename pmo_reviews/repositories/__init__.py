"""
Repository implementations for data access.
"""

from pmo_reviews.repositories.base import BaseRepository, InMemoryRepository
from pmo_reviews.repositories.database import Database, PostgresRepository
from pmo_reviews.repositories.reference_repo import (
    InMemoryDepartmentRepository,
    InMemoryQuestionRepository,
    InMemoryZoneRepository,
    PostgresDepartmentRepository,
    PostgresQuestionRepository,
    PostgresZoneRepository,
)
from pmo_reviews.repositories.review_repo import InMemoryReviewRepository, PostgresReviewRepository
from pmo_reviews.repositories.user_repo import InMemoryUserRepository, PostgresUserRepository

__all__ = [
    "BaseRepository",
    "InMemoryRepository",
    "PostgresRepository",
    "Database",
    "InMemoryZoneRepository",
    "InMemoryDepartmentRepository",
    "InMemoryQuestionRepository",
    "InMemoryReviewRepository",
    "InMemoryUserRepository",
    "PostgresZoneRepository",
    "PostgresDepartmentRepository",
    "PostgresQuestionRepository",
    "PostgresReviewRepository",
    "PostgresUserRepository",
]
