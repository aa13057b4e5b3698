"""Product database table model."""

from sqlmodel import Field

from src.greenmarket.entities._base import MutableEntityTable


class ProductTable(MutableEntityTable, table=True):
    """Database persistence model for products.

    ``category_id`` is indexed but not a foreign key: products
    keep their denormalized label when a category row goes away.
    """

    __tablename__ = "products"

    product_skuid: int = Field(default=0, nullable=False)
    category_id: int | None = Field(default=None, index=True)
    is_green_tag: bool = Field(default=False, nullable=False)
    product_name: str = Field(nullable=False)
    product_category: str = Field(nullable=False)
    unit: str = Field(nullable=False)
    normal_price: float = Field(nullable=False)
    sale_price: float = Field(default=0, nullable=False)
    discount: float = Field(default=0, nullable=False)
    quantity: float = Field(default=0, nullable=False)
