"""
API dependencies for dependency injection.
"""

from typing import Callable, Optional

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pmo_reviews.core.config import (
    GeminiSettings,
    Settings,
    load_gemini_settings,
    settings as default_settings,
)
from pmo_reviews.core.constants import UserRole
from pmo_reviews.core.exceptions import AuthenticationError, AuthorizationError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.core.security import verify_session_token
from pmo_reviews.domain.user import CurrentUser
from pmo_reviews.repositories import (
    Database,
    InMemoryDepartmentRepository,
    InMemoryQuestionRepository,
    InMemoryReviewRepository,
    InMemoryUserRepository,
    InMemoryZoneRepository,
    PostgresDepartmentRepository,
    PostgresQuestionRepository,
    PostgresReviewRepository,
    PostgresUserRepository,
    PostgresZoneRepository,
)
from pmo_reviews.services import AuthService, ReferenceService, ReportService, ReviewService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class ServiceContainer:
    """
    Container for all application services.

    One container is attached to each app instance (``app.state.container``);
    repositories and the database handle are created on ``initialize``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gemini_transport: Optional[httpx.AsyncBaseTransport] = None,
        gemini_settings_loader: Callable[[], GeminiSettings] = load_gemini_settings,
    ) -> None:
        self.settings = settings or default_settings
        self.gemini_transport = gemini_transport
        self.gemini_settings_loader = gemini_settings_loader
        self.database: Optional[Database] = None
        self._initialized = False

    def initialize(self) -> None:
        """Initialize all services."""
        if self._initialized:
            return

        db_settings = self.settings.database
        if db_settings.backend == "postgres":
            self.database = Database(
                db_settings.url,
                min_size=db_settings.pool_min_size,
                max_size=db_settings.pool_max_size,
            )
            zones = PostgresZoneRepository(self.database)
            departments = PostgresDepartmentRepository(self.database)
            questions = PostgresQuestionRepository(self.database)
            reviews = PostgresReviewRepository(self.database)
            users = PostgresUserRepository(self.database)
        else:
            zones = InMemoryZoneRepository()
            departments = InMemoryDepartmentRepository()
            questions = InMemoryQuestionRepository()
            reviews = InMemoryReviewRepository()
            users = InMemoryUserRepository()

        self._reference_service = ReferenceService(zones, departments, questions)
        self._review_service = ReviewService(reviews, self._reference_service)
        self._auth_service = AuthService(users)
        self._report_service = ReportService(
            self._review_service,
            settings_loader=self.gemini_settings_loader,
            transport=self.gemini_transport,
            font_path=self.settings.report_font_path,
        )

        logger.info("Service container initialized", backend=db_settings.backend)
        self._initialized = True

    async def close(self) -> None:
        """Release the database pool."""
        if self.database is not None:
            await self.database.close()

    @property
    def reference_service(self) -> ReferenceService:
        """Get the reference data service."""
        self.initialize()
        return self._reference_service

    @property
    def review_service(self) -> ReviewService:
        """Get the review service."""
        self.initialize()
        return self._review_service

    @property
    def auth_service(self) -> AuthService:
        """Get the auth service."""
        self.initialize()
        return self._auth_service

    @property
    def report_service(self) -> ReportService:
        """Get the report service."""
        self.initialize()
        return self._report_service


def get_container(request: Request) -> ServiceContainer:
    """Container attached to the running app."""
    return request.app.state.container


# Dependency functions for FastAPI
def get_reference_service(
    container: ServiceContainer = Depends(get_container),
) -> ReferenceService:
    return container.reference_service


def get_review_service(
    container: ServiceContainer = Depends(get_container),
) -> ReviewService:
    return container.review_service


def get_auth_service(
    container: ServiceContainer = Depends(get_container),
) -> AuthService:
    return container.auth_service


def get_report_service(
    container: ServiceContainer = Depends(get_container),
) -> ReportService:
    return container.report_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Resolve the caller from a bearer session token.

    Raises:
        AuthenticationError: No token, or the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    claims = verify_session_token(credentials.credentials)
    try:
        return CurrentUser.from_claims(claims)
    except (KeyError, ValueError) as e:
        raise AuthenticationError("Invalid session token") from e


def require_roles(*roles: UserRole):
    """Dependency factory that admits only the given roles."""
    allowed = {role.value for role in roles}

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning("Access denied", user_id=user.id, role=user.role)
            raise AuthorizationError()
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_writer = require_roles(UserRole.ADMIN, UserRole.REVIEWER)
