"""Request bodies accepted by the HTTP handlers."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from src.greenmarket.entities.product import Product

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserRegisterRequest(BaseModel):
    full_name: NonBlankStr
    email: EmailStr
    password: str = Field(min_length=6)


class UserLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProductPayload(BaseModel):
    """Product fields accepted on create and update."""

    product_skuid: int = 0
    category_id: int | None = Field(default=None, ge=0)
    is_green_tag: bool = False
    product_name: NonBlankStr
    product_category: NonBlankStr
    unit: NonBlankStr
    normal_price: float = Field(gt=0)
    sale_price: float = Field(default=0, ge=0)
    discount: float = Field(default=0, ge=0, le=100)
    quantity: float = Field(ge=0)

    def to_product(self, product_id: int | None = None) -> Product:
        return Product(id=product_id, **self.model_dump())
