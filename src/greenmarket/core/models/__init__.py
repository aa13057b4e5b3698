"""Core models exports."""

from .auth import Identity, TokenClaims
from .payments import WebhookItem, WebhookMetadata, WebhookRequest

__all__ = [
    "Identity",
    "TokenClaims",
    "WebhookItem",
    "WebhookMetadata",
    "WebhookRequest",
]
