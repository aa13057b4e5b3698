"""Payment database table model."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from src.greenmarket.entities._base import MutableEntityTable


class PaymentTable(MutableEntityTable, table=True):
    """One row per gateway transaction, updated in place on redelivery."""

    __tablename__ = "payments"

    transaction_id: str = Field(index=True, unique=True, nullable=False)
    external_id: str = Field(default="", index=True)
    user_id: str = Field(default="")
    amount: int = Field(default=0, sa_type=sa.BigInteger)
    status: str = Field(default="")
    currency: str = Field(default="")
    description: str = Field(default="")
    payment_method: str = Field(default="")
    payment_channel: str = Field(default="")
    purpose: str = Field(default="")
    gateway_created_at: datetime | None = Field(
        default=None, sa_type=sa.DateTime(timezone=True)
    )
    gateway_updated_at: datetime | None = Field(
        default=None, sa_type=sa.DateTime(timezone=True)
    )
