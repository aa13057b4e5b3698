"""Entities grouped by business concept.

Each entity package holds:
- entity.py: domain model returned by services and serialized by the API
- table.py: SQLModel persistence model
- repository.py: data access for the table
"""

from .category import Category, CategoryRepository, CategoryTable
from .payment import Payment, PaymentRepository, PaymentTable
from .product import Product, ProductRepository, ProductTable
from .user import User, UserRepository, UserTable

__all__ = [
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "Payment",
    "PaymentRepository",
    "PaymentTable",
    "Product",
    "ProductRepository",
    "ProductTable",
    "User",
    "UserRepository",
    "UserTable",
]
