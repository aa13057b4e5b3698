"""Entity: Payment."""

from datetime import datetime

from pydantic import Field

from src.greenmarket.entities._base import Entity


class Payment(Entity):
    """Last known state of a gateway transaction."""

    transaction_id: str = Field(description="Gateway transaction/invoice id")
    external_id: str = Field(default="", description="Our reference sent to the gateway")
    user_id: str = Field(default="")
    amount: int = Field(default=0, description="Amount in minor currency units")
    status: str = Field(default="", description="Gateway status, e.g. PAID or EXPIRED")
    currency: str = Field(default="")
    description: str = Field(default="")
    payment_method: str = Field(default="")
    payment_channel: str = Field(default="")
    purpose: str = Field(default="", description="metadata.purpose from the gateway")
    gateway_created_at: datetime | None = Field(default=None)
    gateway_updated_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
