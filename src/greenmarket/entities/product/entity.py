"""Entity: Product."""

from datetime import datetime

from pydantic import Field

from src.greenmarket.entities._base import Entity


class Product(Entity):
    """Catalogue product.

    ``product_category`` is a denormalized copy of the category label;
    ``category_id`` is a plain reference with no ownership.
    """

    product_skuid: int = Field(default=0, description="Stock keeping unit identifier")
    category_id: int | None = Field(default=None, description="Referenced category")
    is_green_tag: bool = Field(default=False, description="Eco-friendly product label")
    product_name: str = Field(description="Display name")
    product_category: str = Field(description="Category label")
    unit: str = Field(description="Sales unit, e.g. kg or pcs")
    normal_price: float = Field(description="List price, strictly positive")
    sale_price: float = Field(default=0, description="Discounted price")
    discount: float = Field(default=0, description="Discount percentage 0-100")
    quantity: float = Field(default=0, description="Units in stock")
    updated_at: datetime | None = Field(default=None)
