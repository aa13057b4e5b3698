from .user_service import SqlUserService

__all__ = ["SqlUserService"]
