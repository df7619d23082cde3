"""
Service layer implementations.
"""

from pmo_reviews.services.auth_service import AuthService
from pmo_reviews.services.reference_service import ReferenceService
from pmo_reviews.services.report_service import ReportService
from pmo_reviews.services.review_service import ReviewService

__all__ = [
    "AuthService",
    "ReferenceService",
    "ReportService",
    "ReviewService",
]
