"""User entity module.

- User: domain entity
- UserTable: database persistence model
- UserRepository: data access layer
"""

from .entity import User
from .repository import UserRepository
from .table import UserTable

__all__ = ["User", "UserTable", "UserRepository"]
