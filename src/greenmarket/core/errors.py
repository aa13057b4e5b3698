"""Tagged service errors.

Services raise :class:`MarketError` with an :class:`ErrorKind`; HTTP handlers
decide the status code from the kind, never from the message text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"

    @property
    def status_code(self) -> int:
        return _DEFAULT_STATUS[self]


_DEFAULT_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM: 500,
}


class MarketError(Exception):
    """Domain failure raised by the service layer."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"MarketError({self.kind.value!r}, {self.message!r})"

    @classmethod
    def validation(cls, message: str) -> "MarketError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def authentication(cls, message: str) -> "MarketError":
        return cls(ErrorKind.AUTHENTICATION, message)

    @classmethod
    def authorization(cls, message: str) -> "MarketError":
        return cls(ErrorKind.AUTHORIZATION, message)

    @classmethod
    def not_found(cls, message: str) -> "MarketError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def upstream(cls, message: str) -> "MarketError":
        return cls(ErrorKind.UPSTREAM, message)
