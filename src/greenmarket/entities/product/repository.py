"""Product repository."""

from sqlalchemy import func
from sqlmodel import Session, select

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Product]:
        rows = self._session.exec(select(ProductTable).order_by(ProductTable.id)).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def list_page(self, offset: int, limit: int) -> list[Product]:
        statement = (
            select(ProductTable).order_by(ProductTable.id).offset(offset).limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(ProductTable)).one()

    def list_by_category(self, category_id: int) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(ProductTable.category_id == category_id)
            .order_by(ProductTable.id)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(
            product.model_dump(exclude={"id", "updated_at"})
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product: Product) -> Product | None:
        """Overwrite the mutable fields of an existing product.

        Returns None when no row has ``product.id``.
        """
        row = self._session.get(ProductTable, product.id)
        if row is None:
            return None
        for field, value in product.model_dump(
            exclude={"id", "created_at", "updated_at"}
        ).items():
            setattr(row, field, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: int) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
