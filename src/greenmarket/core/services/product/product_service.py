from loguru import logger
from sqlmodel import Session

from src.greenmarket.core.errors import MarketError
from src.greenmarket.core.services.database.db_session import (
    SessionFactory,
    transaction,
)
from src.greenmarket.entities.category import CategoryRepository
from src.greenmarket.entities.product import Product, ProductRepository


class SqlProductService:
    """Product catalogue operations backed by the relational store.

    Each call runs in a session of its own.
    """

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def _validate(self, session: Session, product: Product) -> None:
        """Business rules shared by create and update."""
        if not product.product_name.strip():
            raise MarketError.validation("product name is required")
        if not product.product_category.strip():
            raise MarketError.validation("product category is required")
        if not product.unit.strip():
            raise MarketError.validation("unit is required")
        if product.normal_price <= 0:
            raise MarketError.validation("normal price must be greater than 0")
        if product.sale_price < 0:
            raise MarketError.validation("sale price cannot be negative")
        if not 0 <= product.discount <= 100:
            raise MarketError.validation("discount must be between 0 and 100")
        if product.quantity < 0:
            raise MarketError.validation("quantity cannot be negative")
        if product.category_id and not CategoryRepository(session).exists(
            product.category_id
        ):
            raise MarketError.validation("invalid category id")

    def list_products(self) -> list[Product]:
        with self._session_factory() as session:
            return ProductRepository(session).list_all()

    def list_products_page(self, page: int, limit: int) -> tuple[list[Product], int]:
        offset = (page - 1) * limit
        with self._session_factory() as session:
            product_repo = ProductRepository(session)
            return product_repo.list_page(offset, limit), product_repo.count()

    def list_by_category(self, category_id: int) -> list[Product]:
        with self._session_factory() as session:
            if category_id <= 0 or not CategoryRepository(session).exists(category_id):
                raise MarketError.validation("invalid category id")
            return ProductRepository(session).list_by_category(category_id)

    def get_product(self, product_id: int) -> Product:
        product = None
        if product_id > 0:
            with self._session_factory() as session:
                product = ProductRepository(session).get(product_id)
        if product is None:
            raise MarketError.not_found("product not found")
        return product

    def create_product(self, product: Product) -> Product:
        with self._session_factory() as session:
            self._validate(session, product)
            with transaction(session):
                created = ProductRepository(session).create(product)
        logger.info("Created product {} ({})", created.id, created.product_name)
        return created

    def update_product(self, product: Product) -> Product:
        if not product.id:
            raise MarketError.validation("product ID is required")
        with self._session_factory() as session:
            self._validate(session, product)
            with transaction(session):
                updated = ProductRepository(session).update(product)
                if updated is None:
                    raise MarketError.not_found("product not found")
        logger.info("Updated product {}", updated.id)
        return updated

    def delete_product(self, product_id: int) -> None:
        if product_id <= 0:
            raise MarketError.not_found("invalid product id")
        with self._session_factory() as session, transaction(session):
            if not ProductRepository(session).delete(product_id):
                raise MarketError.not_found("product not found")
        logger.info("Deleted product {}", product_id)
