from loguru import logger

from src.greenmarket.core.errors import MarketError
from src.greenmarket.core.models.payments import WebhookRequest
from src.greenmarket.core.services.database.db_session import (
    SessionFactory,
    transaction,
)
from src.greenmarket.entities.payment import Payment, PaymentRepository


class SqlPaymentsService:
    """Records payment gateway callbacks."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def receive_payment_webhook(self, event: WebhookRequest) -> None:
        """Store the latest state of the transaction described by ``event``.

        Redelivery of the same transaction overwrites the stored row.
        """
        if not event.id:
            raise MarketError.validation("transaction id is required")

        payment = Payment(
            transaction_id=event.id,
            external_id=event.external_id,
            user_id=event.user_id,
            amount=event.amount,
            status=event.status,
            currency=event.currency,
            description=event.description,
            payment_method=event.payment_method,
            payment_channel=event.payment_channel,
            purpose=event.metadata.purpose,
            gateway_created_at=event.created,
            gateway_updated_at=event.updated,
        )
        with self._session_factory() as session, transaction(session):
            stored = PaymentRepository(session).upsert(payment)

        logger.bind(transaction_id=stored.transaction_id).info(
            "Payment {} is {} ({} {})",
            stored.external_id or stored.transaction_id,
            stored.status or "UNKNOWN",
            stored.amount,
            stored.currency,
        )
