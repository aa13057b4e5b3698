"""Database initialization script."""

from src.greenmarket.core.services.database import DbManageService, DbSessionService
from src.greenmarket.runtime.config.config_data import ConfigData
from src.greenmarket.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    config = config or get_config()
    db_session_service = DbSessionService(config.database, config.app.environment)
    try:
        DbManageService(db_session_service.engine).create_all()
    finally:
        db_session_service.dispose()


if __name__ == "__main__":
    init_db()
