"""Entity package: Payment."""

from .entity import Payment
from .repository import PaymentRepository
from .table import PaymentTable

__all__ = ["Payment", "PaymentRepository", "PaymentTable"]
