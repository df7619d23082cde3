"""
Staff accounts and the authenticated caller.
"""

from typing import Any

from pydantic import Field, field_validator

from pmo_reviews.core.constants import UserRole
from pmo_reviews.domain.base import CamelModel, Entity


class User(Entity):
    """A staff account. ``password_hash`` is never serialized to clients."""

    email: str
    name: str = Field(..., min_length=1)
    role: UserRole = Field(default=UserRole.REVIEWER)
    password_hash: str = Field(default="", exclude=True)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    def to_claims(self) -> dict[str, Any]:
        """Identity claims embedded in a session token."""
        return {"sub": self.id, "email": self.email, "name": self.name, "role": self.role}


class CurrentUser(CamelModel):
    """The caller resolved from a verified session token."""

    id: str
    email: str
    name: str
    role: UserRole

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "CurrentUser":
        return cls(
            id=claims["sub"],
            email=claims["email"],
            name=claims["name"],
            role=claims["role"],
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
