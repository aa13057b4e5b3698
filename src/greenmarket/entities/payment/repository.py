"""Payment repository."""

from sqlmodel import Session, select

from .entity import Payment
from .table import PaymentTable


class PaymentRepository:
    """Data-access layer for payments."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_transaction_id(self, transaction_id: str) -> Payment | None:
        statement = select(PaymentTable).where(
            PaymentTable.transaction_id == transaction_id
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Payment.model_validate(row, from_attributes=True)

    def upsert(self, payment: Payment) -> Payment:
        """Insert the payment or overwrite the row with the same transaction id."""
        statement = select(PaymentTable).where(
            PaymentTable.transaction_id == payment.transaction_id
        )
        row = self._session.exec(statement).first()
        values = payment.model_dump(exclude={"id", "created_at", "updated_at"})
        if row is None:
            row = PaymentTable.model_validate(values)
        else:
            for field, value in values.items():
                setattr(row, field, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Payment.model_validate(row, from_attributes=True)
