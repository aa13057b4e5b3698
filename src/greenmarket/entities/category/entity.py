"""Entity: Category."""

from pydantic import Field

from src.greenmarket.entities._base import Entity


class Category(Entity):
    """Product category. Products reference it by id only."""

    product_category: str = Field(description="Category label")
