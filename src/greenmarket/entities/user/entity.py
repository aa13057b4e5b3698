"""User domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.greenmarket.entities._base import Entity


class User(Entity):
    """Marketplace account.

    Carries the password hash and pending verification code, so it must never
    be serialized to clients directly; use :class:`UserSummary` instead.
    """

    full_name: str = Field(description="User's full name")
    email: str = Field(description="Unique, lower-cased email address")
    password_hash: str = Field(description="bcrypt hash of the password")
    role: str = Field(default="user", description="Authorization role")
    is_verified: bool = Field(default=False, description="Email address confirmed")
    verification_code: str | None = Field(
        default=None, description="Pending single-use email verification code"
    )
    verification_expires_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    def summary(self) -> "UserSummary":
        return UserSummary.model_validate(self, from_attributes=True)


class UserSummary(BaseModel):
    """Public view of a user returned by the API."""

    id: int | None
    full_name: str
    email: str
    role: str
    is_verified: bool
    created_at: datetime
