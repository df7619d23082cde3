"""
API v1 routers.
"""

from pmo_reviews.api.v1 import auth, departments, health, questions, reports, reviews, zones

__all__ = ["auth", "departments", "health", "questions", "reports", "reviews", "zones"]
