"""Database engine, sessions and schema management."""

from .db_manage import DbManageService
from .db_session import DbSessionService, SessionFactory, transaction

__all__ = ["DbManageService", "DbSessionService", "SessionFactory", "transaction"]
