"""Payment gateway webhook payload."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WebhookItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    purpose: str = ""
    name: str = ""
    price: int = 0
    category: str = ""
    quantity: int = 0


class WebhookMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    purpose: str = ""


class WebhookRequest(BaseModel):
    """Invoice callback sent by the payment gateway.

    Every field is optional on the wire; absent values take their zero value.
    Unknown fields are ignored so gateway additions do not break delivery.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    items: list[WebhookItem] = Field(default_factory=list)
    amount: int = 0
    status: str = ""
    created: datetime | None = None
    is_high: bool = False
    updated: datetime | None = None
    user_id: str = ""
    currency: str = ""
    description: str = ""
    external_id: str = ""
    merchant_name: str = ""
    payment_method: str = ""
    payment_channel: str = ""
    payment_destination: str = ""
    failure_redirect_url: str = ""
    success_redirect_url: str = ""
    metadata: WebhookMetadata = Field(default_factory=WebhookMetadata)
