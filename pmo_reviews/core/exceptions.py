"""
Custom exception hierarchy for the PMO review tracker.
Provides structured error handling with proper HTTP status codes.
"""

from typing import Any, Optional

from pmo_reviews.core.constants import REPORT_FAILED


class PMOReviewError(Exception):
    """Base exception for all PMO review tracker errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class ConfigurationError(PMOReviewError):
    """Error in application configuration."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details,
            status_code=500,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(PMOReviewError):
    """Request validation failed."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=details,
            status_code=400,
        )


class InvalidRequestError(ValidationError):
    """Invalid request parameters."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message=message, details=details)
        self.code = "INVALID_REQUEST"


# =============================================================================
# Authentication/Authorization Errors (401, 403)
# =============================================================================


class AuthenticationError(PMOReviewError):
    """Authentication failed."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message=message,
            code="AUTHENTICATION_REQUIRED",
            status_code=401,
        )


class AuthorizationError(PMOReviewError):
    """Authorization failed - insufficient permissions."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(
            message=message,
            code="AUTHORIZATION_FAILED",
            status_code=403,
        )


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(PMOReviewError):
    """Requested resource not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or f"{resource_type} not found"

        super().__init__(
            message=msg,
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id},
            status_code=404,
        )


class ZoneNotFoundError(NotFoundError):
    """Zone not found."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(resource_type="Zone", resource_id=zone_id)
        self.code = "ZONE_NOT_FOUND"


class DepartmentNotFoundError(NotFoundError):
    """Department not found."""

    def __init__(self, department_id: str) -> None:
        super().__init__(resource_type="Department", resource_id=department_id)
        self.code = "DEPARTMENT_NOT_FOUND"


class QuestionNotFoundError(NotFoundError):
    """Question not found."""

    def __init__(self, question_id: str) -> None:
        super().__init__(resource_type="Question", resource_id=question_id)
        self.code = "QUESTION_NOT_FOUND"


class ReviewNotFoundError(NotFoundError):
    """Review not found."""

    def __init__(self, review_id: str) -> None:
        super().__init__(resource_type="Review", resource_id=review_id)
        self.code = "REVIEW_NOT_FOUND"


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(PMOReviewError):
    """Entity violates a uniqueness constraint."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            code="CONFLICT",
            details={"resource_type": resource_type, "field": field},
            status_code=409,
        )


# =============================================================================
# External Service Errors (500)
# =============================================================================


class ExternalServiceError(PMOReviewError):
    """Error communicating with external service."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"{service_name} error: {message}",
            code="EXTERNAL_SERVICE_ERROR",
            details={"service": service_name, **(details or {})},
            status_code=500,
        )


class SummarizationServiceError(ExternalServiceError):
    """The generative-text endpoint failed or answered with a non-2xx status."""

    def __init__(self, reason: str, upstream_status: Optional[int] = None) -> None:
        details = {"upstream_status": upstream_status} if upstream_status is not None else {}
        super().__init__(service_name="Gemini", message=reason, details=details)
        self.code = "SUMMARIZATION_ERROR"
        self.reason = reason
        self.upstream_status = upstream_status

    def to_dict(self) -> dict[str, Any]:
        """Flat envelope: generic error, vendor message, upstream status."""
        payload: dict[str, Any] = {
            "error": REPORT_FAILED,
            "code": self.code,
            "details": self.reason,
        }
        if self.upstream_status is not None:
            payload["statusCode"] = self.upstream_status
        return payload


class DatabaseError(ExternalServiceError):
    """Error communicating with database."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(service_name="Database", message=message, details=details)
        self.code = "DATABASE_ERROR"
