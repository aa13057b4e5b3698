"""Service layer: implementations of the ports consumed by the HTTP handlers."""

from .payment import SqlPaymentsService
from .ports import PaymentsService, ProductService, UserService
from .product import SqlProductService
from .user import SqlUserService

__all__ = [
    "PaymentsService",
    "ProductService",
    "SqlPaymentsService",
    "SqlProductService",
    "SqlUserService",
    "UserService",
]
