"""Service contracts consumed by the HTTP handlers.

Handlers depend only on these protocols. Implementations raise
:class:`~src.greenmarket.core.errors.MarketError` for domain failures.
"""

from typing import Protocol

from src.greenmarket.core.models.payments import WebhookRequest
from src.greenmarket.entities.product import Product
from src.greenmarket.entities.user import User


class UserService(Protocol):
    def register(self, full_name: str, email: str, password: str) -> User: ...

    def login(self, email: str, password: str) -> tuple[str, User]:
        """Return an access token and the authenticated user."""
        ...

    def verify_email(self, verification_code: str) -> None: ...


class ProductService(Protocol):
    def list_products(self) -> list[Product]: ...

    def list_products_page(self, page: int, limit: int) -> tuple[list[Product], int]:
        """Return one page of products and the total product count."""
        ...

    def list_by_category(self, category_id: int) -> list[Product]: ...

    def get_product(self, product_id: int) -> Product: ...

    def create_product(self, product: Product) -> Product: ...

    def update_product(self, product: Product) -> Product: ...

    def delete_product(self, product_id: int) -> None: ...


class PaymentsService(Protocol):
    def receive_payment_webhook(self, event: WebhookRequest) -> None: ...
