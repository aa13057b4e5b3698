"""Schema management for the relational store."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all missing database tables."""
        # table models register themselves on SQLModel.metadata when imported
        from src.greenmarket.entities import (  # noqa: F401
            CategoryTable,
            PaymentTable,
            ProductTable,
            UserTable,
        )

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
