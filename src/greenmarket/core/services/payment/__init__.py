from .payment_service import SqlPaymentsService

__all__ = ["SqlPaymentsService"]
