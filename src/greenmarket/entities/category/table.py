"""Category database table model."""

from sqlmodel import Field

from src.greenmarket.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "categories"

    product_category: str = Field(index=True, unique=True, nullable=False)
