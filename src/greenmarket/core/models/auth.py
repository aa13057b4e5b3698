"""Authentication models shared by the JWT services and API dependencies."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Claims of a verified access token."""

    subject: str = Field(description="Raw sub claim")
    role: str = Field(default="", description="Role claim")
    issuer: str | None = Field(default=None)
    issued_at: datetime | None = Field(default=None)
    expires_at: datetime | None = Field(default=None)
    custom_claims: dict = Field(default_factory=dict)

    def is_expired(self, now: datetime | None = None) -> bool:
        """A token without an expiration is treated as expired."""
        if self.expires_at is None:
            return True
        return (now or datetime.now(UTC)) > self.expires_at


class Identity(BaseModel):
    """Caller identity attached to an authenticated request."""

    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role.upper() == "ADMIN"
