import pytest

from src.greenmarket.core.errors import MarketError
from tests.fixtures.services import make_product

PRODUCT_BODY = {
    "product_skuid": 1001,
    "category_id": 1,
    "is_green_tag": True,
    "product_name": "Organic Spinach",
    "product_category": "Vegetables",
    "unit": "kg",
    "normal_price": 25000,
    "sale_price": 20000,
    "discount": 20,
    "quantity": 10,
}


class TestGetAllProducts:
    def test_defaults(self, client, fake_product_service):
        response = client.get("/products")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "successfully get all products"
        assert body["page"] == 1
        assert body["limit"] == 30
        assert fake_product_service.calls == [("list_products_page", 1, 30)]

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("?page=abc&limit=500", (1, 30)),
            ("?page=0&limit=0", (1, 30)),
            ("?page=-2&limit=-5", (1, 30)),
            ("?page=3&limit=100", (3, 100)),
            ("?page=2&limit=101", (2, 30)),
            ("?page=100000000000000000000", (1, 30)),
            ("?page=9223372036854775807&limit=2", (1, 2)),
            ("?page=4611686018427387904&limit=2", (4611686018427387904, 2)),
            ("?page=5_0&limit=1_0", (1, 30)),
            ("?page=%202&limit=10%20", (1, 30)),
            ("?page=%D9%A3", (1, 30)),
            ("?page=%2B2&limit=%2B10", (2, 10)),
        ],
    )
    def test_invalid_values_fall_back(self, client, fake_product_service, query, expected):
        response = client.get(f"/products{query}")

        assert response.status_code == 200
        body = response.json()
        assert (body["page"], body["limit"]) == expected
        assert fake_product_service.calls == [("list_products_page", *expected)]

    def test_total_pages_rounds_up(self, client, fake_product_service):
        fake_product_service.total = 61

        body = client.get("/products?limit=30").json()

        assert body["total_items"] == 61
        assert body["total_pages"] == 3

    def test_empty_catalogue(self, client, fake_product_service):
        fake_product_service.products = []
        fake_product_service.total = 0

        body = client.get("/products").json()

        assert body["products"] == []
        assert body["total_pages"] == 0

    def test_service_error(self, client, fake_product_service):
        fake_product_service.error = MarketError.upstream("database error")

        response = client.get("/products")

        assert response.status_code == 500


class TestGetProductsByCategory:
    def test_success(self, client):
        response = client.get("/products/category/1")

        assert response.status_code == 200
        body = response.json()
        assert body["category_id"] == 1
        assert body["total"] == 1
        assert body["products"][0]["product_name"] == "Organic Spinach"

    @pytest.mark.parametrize("raw", ["abc", "-1", "1.5"])
    def test_unparseable_id(self, client, fake_product_service, raw):
        response = client.get(f"/products/category/{raw}")

        assert response.status_code == 400
        assert response.json()["message"] == "invalid category id"
        assert fake_product_service.calls == []

    def test_validation_error(self, client, fake_product_service):
        fake_product_service.error = MarketError.validation("invalid category id")

        assert client.get("/products/category/0").status_code == 400

    def test_other_error(self, client, fake_product_service):
        fake_product_service.error = MarketError.upstream("database error")

        assert client.get("/products/category/2").status_code == 500


class TestGetProductById:
    def test_success(self, client):
        response = client.get("/products/1")

        assert response.status_code == 200
        assert response.json()["product"]["id"] == 1

    def test_not_found_is_bad_request(self, client):
        response = client.get("/products/42")

        assert response.status_code == 400
        assert response.json()["message"] == "product not found"

    def test_unparseable_id(self, client):
        assert client.get("/products/abc").status_code == 400

    def test_other_error(self, client, fake_product_service):
        fake_product_service.error = MarketError.upstream("database error")

        assert client.get("/products/1").status_code == 500


class TestCreateProduct:
    def test_success_echoes_prices(self, client, admin_headers, fake_product_service):
        response = client.post("/products", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product successfully created"
        assert body["product"]["id"] == 99
        assert body["product"]["normal_price"] == 25000
        assert body["product"]["sale_price"] == 20000
        assert body["product"]["discount"] == 20
        created = fake_product_service.calls[0][1]
        assert created.id is None

    @pytest.mark.parametrize(
        "override",
        [
            {"normal_price": 0},
            {"sale_price": -1},
            {"discount": 101},
            {"quantity": -1},
            {"product_name": ""},
            {"unit": ""},
        ],
    )
    def test_invalid_payload(self, client, admin_headers, fake_product_service, override):
        response = client.post(
            "/products", json={**PRODUCT_BODY, **override}, headers=admin_headers
        )

        assert response.status_code == 400
        assert fake_product_service.calls == []

    def test_missing_quantity(self, client, admin_headers):
        body = {k: v for k, v in PRODUCT_BODY.items() if k != "quantity"}

        response = client.post("/products", json=body, headers=admin_headers)

        assert response.status_code == 400

    def test_service_validation_error(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.validation("invalid category id")

        response = client.post("/products", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "invalid category id"

    def test_service_other_error(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.not_found("unexpected")

        response = client.post("/products", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 500


class TestUpdateProduct:
    def test_success(self, client, admin_headers, fake_product_service):
        response = client.put("/products/5", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "successfully update product"
        updated = fake_product_service.calls[0][1]
        assert updated.id == 5

    def test_not_found(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.not_found("product not found")

        response = client.put("/products/5", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 404

    def test_validation_error(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.validation("unit is required")

        response = client.put("/products/5", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 400

    def test_other_error(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.upstream("database error")

        response = client.put("/products/5", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 500

    def test_unparseable_id(self, client, admin_headers, fake_product_service):
        response = client.put("/products/x", json=PRODUCT_BODY, headers=admin_headers)

        assert response.status_code == 400
        assert fake_product_service.calls == []

    def test_requires_admin(self, client, user_headers):
        response = client.put("/products/5", json=PRODUCT_BODY, headers=user_headers)

        assert response.status_code == 403


class TestDeleteProduct:
    def test_success(self, client, admin_headers):
        response = client.delete("/products/5", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "product successfully deleted",
            "product_id": 5,
        }

    def test_not_found(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.not_found("product not found")

        assert client.delete("/products/5", headers=admin_headers).status_code == 404

    def test_other_error(self, client, admin_headers, fake_product_service):
        fake_product_service.error = MarketError.upstream("database error")

        assert client.delete("/products/5", headers=admin_headers).status_code == 500

    def test_unparseable_id(self, client, admin_headers):
        assert client.delete("/products/abc", headers=admin_headers).status_code == 400

    def test_without_token(self, client):
        assert client.delete("/products/5").status_code == 401


def test_list_returns_serialized_products(client, fake_product_service):
    fake_product_service.products = [make_product(id=1), make_product(id=2)]
    fake_product_service.total = 2

    body = client.get("/products").json()

    assert [p["id"] for p in body["products"]] == [1, 2]
