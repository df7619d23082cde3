"""
System-wide constants for the PMO review tracker.
"""

from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, Enum):
    """Staff roles."""

    ADMIN = "admin"
    REVIEWER = "reviewer"
    VIEWER = "viewer"


class ReviewStatus(str, Enum):
    """Review lifecycle states."""

    DRAFT = "draft"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ReportScope(str, Enum):
    """Grouping dimension for a summary report."""

    ZONE = "zone"
    DEPARTMENT = "department"


class SummaryKind(str, Enum):
    """Outcome of a summarization call."""

    OK = "ok"
    DEGRADED = "degraded"


# =============================================================================
# API Constants
# =============================================================================

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

# =============================================================================
# Reporting Constants
# =============================================================================

# Payload bounds for the summarizer prompt
MAX_NOTES_CHARS = 1000
MAX_ANSWER_CHARS = 500
MAX_ANSWERS_PER_REVIEW = 3

NO_REVIEWS_HIGHLIGHT = "No reviews found in the database"
INVALID_MODEL_JSON = "Invalid JSON from model"
REPORT_FAILED = "Failed to generate report"

# =============================================================================
# Identifier prefixes
# =============================================================================

ID_PREFIXES = {
    "zone": "zone",
    "department": "dept",
    "question": "q",
    "review": "rev",
    "user": "usr",
}
