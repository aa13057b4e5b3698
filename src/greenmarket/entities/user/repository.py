"""User repository."""

from sqlalchemy import update
from sqlmodel import Session, col, select

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> User | None:
        statement = select(UserTable).where(UserTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_verification_code(self, code: str) -> User | None:
        statement = select(UserTable).where(UserTable.verification_code == code)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def mark_verified(self, code: str) -> bool:
        """Consume a verification code and flag its owner as verified.

        Returns False when no unverified account holds ``code`` any more.
        """
        statement = (
            update(UserTable)
            .where(UserTable.verification_code == code)
            .where(col(UserTable.is_verified).is_(False))
            .values(
                is_verified=True,
                verification_code=None,
                verification_expires_at=None,
            )
        )
        result = self._session.connection().execute(statement)
        return result.rowcount == 1

    def create(self, user: User) -> User:
        row = UserTable.model_validate(user.model_dump(exclude={"id", "updated_at"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def update(self, user: User) -> User:
        row = self._session.get(UserTable, user.id)
        if row is None:
            raise ValueError(f"User {user.id} not found")
        for field, value in user.model_dump(exclude={"id", "created_at", "updated_at"}).items():
            setattr(row, field, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)
