"""
Login and staff account endpoints.
"""

from fastapi import APIRouter, Depends, status
from pydantic import Field, field_validator

from pmo_reviews.api.deps import get_auth_service, get_current_user, require_admin
from pmo_reviews.core.constants import UserRole
from pmo_reviews.core.logging import get_logger
from pmo_reviews.domain.base import CamelModel
from pmo_reviews.domain.user import CurrentUser, User
from pmo_reviews.services.auth_service import AuthService

logger = get_logger(__name__)

router = APIRouter()


class LoginRequest(CamelModel):
    """Credentials for a session token."""

    email: str
    password: str


class LoginResponse(CamelModel):
    """Issued session token and the signed-in user."""

    token: str
    token_type: str = "bearer"
    user: User


class CreateUserRequest(CamelModel):
    """Request to create a staff account."""

    email: str
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.REVIEWER

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return v


@router.post("/auth/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Exchange email and password for a session token.
    """
    token, user = await auth_service.authenticate(request.email, request.password)
    return LoginResponse(token=token, user=user)


@router.get("/auth/me", response_model=CurrentUser)
async def me(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """The signed-in user."""
    return user


@router.get("/users", response_model=list[User])
async def list_users(
    _: CurrentUser = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
) -> list[User]:
    return await auth_service.list_users()


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    admin: CurrentUser = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Create a staff account (admin only).
    """
    logger.info("Creating user", created_by=admin.id, role=request.role)
    return await auth_service.create_user(
        email=request.email,
        name=request.name,
        password=request.password,
        role=request.role,
    )
