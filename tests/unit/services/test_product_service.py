import pytest

from src.greenmarket.core.errors import ErrorKind, MarketError
from src.greenmarket.core.services.product import SqlProductService
from src.greenmarket.entities.category import Category, CategoryRepository
from src.greenmarket.entities.product import Product


@pytest.fixture
def category_id(session) -> int:
    category = CategoryRepository(session).create(Category(product_category="Vegetables"))
    session.commit()
    return category.id


@pytest.fixture
def product_service(session_factory) -> SqlProductService:
    return SqlProductService(session_factory)


def _product(category_id: int | None = None, **overrides) -> Product:
    values = {
        "product_skuid": 1001,
        "category_id": category_id,
        "product_name": "Organic Spinach",
        "product_category": "Vegetables",
        "unit": "kg",
        "normal_price": 25000,
        "sale_price": 20000,
        "discount": 20,
        "quantity": 10,
    }
    values.update(overrides)
    return Product(**values)


def _assert_error(exc_info, kind: ErrorKind, message: str) -> None:
    assert exc_info.value.kind is kind
    assert exc_info.value.message == message


class TestCreateProduct:
    def test_create_and_get(self, product_service, category_id):
        created = product_service.create_product(_product(category_id))

        assert created.id is not None
        fetched = product_service.get_product(created.id)
        assert fetched.product_name == "Organic Spinach"
        assert fetched.normal_price == 25000
        assert fetched.category_id == category_id

    @pytest.mark.parametrize(
        ("override", "message"),
        [
            ({"product_name": " "}, "product name is required"),
            ({"product_category": ""}, "product category is required"),
            ({"unit": ""}, "unit is required"),
            ({"normal_price": 0}, "normal price must be greater than 0"),
            ({"sale_price": -5}, "sale price cannot be negative"),
            ({"discount": 150}, "discount must be between 0 and 100"),
            ({"quantity": -1}, "quantity cannot be negative"),
        ],
    )
    def test_business_rules(self, product_service, override, message):
        with pytest.raises(MarketError) as exc_info:
            product_service.create_product(_product(**override))

        _assert_error(exc_info, ErrorKind.VALIDATION, message)

    def test_unknown_category(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.create_product(_product(category_id=404))

        _assert_error(exc_info, ErrorKind.VALIDATION, "invalid category id")

    def test_without_category_reference(self, product_service):
        created = product_service.create_product(_product(None))

        assert created.category_id is None


class TestListing:
    def test_pages_and_total(self, product_service, category_id):
        for i in range(5):
            product_service.create_product(
                _product(category_id, product_name=f"Item {i}", product_skuid=i)
            )

        items, total = product_service.list_products_page(2, 2)

        assert total == 5
        assert [p.product_name for p in items] == ["Item 2", "Item 3"]

    def test_page_past_the_end(self, product_service, category_id):
        product_service.create_product(_product(category_id))

        items, total = product_service.list_products_page(3, 30)

        assert items == []
        assert total == 1

    def test_list_all(self, product_service, category_id):
        product_service.create_product(_product(category_id))
        product_service.create_product(_product(None, product_name="Loose Carrots"))

        assert len(product_service.list_products()) == 2

    def test_by_category(self, product_service, category_id):
        product_service.create_product(_product(category_id))
        product_service.create_product(_product(None, product_name="Loose Carrots"))

        products = product_service.list_by_category(category_id)

        assert [p.product_name for p in products] == ["Organic Spinach"]

    def test_by_empty_category(self, product_service, category_id):
        assert product_service.list_by_category(category_id) == []

    @pytest.mark.parametrize("bad_id", [0, 999])
    def test_by_invalid_category(self, product_service, bad_id):
        with pytest.raises(MarketError) as exc_info:
            product_service.list_by_category(bad_id)

        _assert_error(exc_info, ErrorKind.VALIDATION, "invalid category id")


class TestUpdateAndDelete:
    def test_get_missing(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.get_product(12)

        _assert_error(exc_info, ErrorKind.NOT_FOUND, "product not found")

    def test_update(self, product_service, category_id):
        created = product_service.create_product(_product(category_id))

        updated = product_service.update_product(
            _product(category_id, quantity=3, sale_price=18000).model_copy(
                update={"id": created.id}
            )
        )

        assert updated.id == created.id
        assert updated.quantity == 3
        assert product_service.get_product(created.id).sale_price == 18000

    def test_update_missing(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.update_product(_product().model_copy(update={"id": 77}))

        _assert_error(exc_info, ErrorKind.NOT_FOUND, "product not found")

    def test_update_without_id(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.update_product(_product())

        _assert_error(exc_info, ErrorKind.VALIDATION, "product ID is required")

    def test_update_checks_rules(self, product_service, category_id):
        created = product_service.create_product(_product(category_id))

        with pytest.raises(MarketError) as exc_info:
            product_service.update_product(
                _product(category_id, normal_price=-1).model_copy(update={"id": created.id})
            )

        _assert_error(exc_info, ErrorKind.VALIDATION, "normal price must be greater than 0")
        assert product_service.get_product(created.id).normal_price == 25000

    def test_delete(self, product_service, category_id):
        created = product_service.create_product(_product(category_id))

        product_service.delete_product(created.id)

        with pytest.raises(MarketError):
            product_service.get_product(created.id)

    def test_delete_missing(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.delete_product(42)

        _assert_error(exc_info, ErrorKind.NOT_FOUND, "product not found")

    def test_delete_zero_id(self, product_service):
        with pytest.raises(MarketError) as exc_info:
            product_service.delete_product(0)

        _assert_error(exc_info, ErrorKind.NOT_FOUND, "invalid product id")
