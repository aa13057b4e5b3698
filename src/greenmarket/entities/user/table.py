"""User database table model."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from src.greenmarket.entities._base import MutableEntityTable


class UserTable(MutableEntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    full_name: str = Field(nullable=False)
    email: str = Field(index=True, unique=True, nullable=False)
    password_hash: str = Field(nullable=False)
    role: str = Field(default="user", nullable=False)
    is_verified: bool = Field(default=False, nullable=False)
    verification_code: str | None = Field(default=None, index=True, unique=True)
    verification_expires_at: datetime | None = Field(
        default=None, sa_type=sa.DateTime(timezone=True)
    )
