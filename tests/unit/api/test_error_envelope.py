"""Request ids, error bodies and health endpoints."""

from src.greenmarket.core.errors import MarketError


def test_request_id_is_echoed(client):
    response = client.get("/products/abc", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 400
    assert response.headers["X-Request-ID"] == "req-123"
    assert response.json() == {
        "success": False,
        "error": "BAD_REQUEST",
        "message": 'invalid integer value "abc"',
        "request_id": "req-123",
    }


def test_request_id_is_generated(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.headers["X-Request-ID"]


def test_validation_errors_carry_details(client):
    response = client.post("/users/login", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert isinstance(body["details"], list)
    assert {tuple(e["loc"]) for e in body["details"]} == {
        ("body", "email"),
        ("body", "password"),
    }
    assert body["request_id"] == response.headers["X-Request-ID"]


def test_unknown_route(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_unexpected_exception_becomes_internal_error(client, fake_product_service):
    fake_product_service.error = RuntimeError("boom")

    response = client.get("/products", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "INTERNAL_SERVER_ERROR",
        "message": "Internal server error",
        "request_id": "req-500",
    }


def test_security_headers(client):
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_readiness_reports_database(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


def test_service_timeout_is_a_service_error(test_config, app_dependencies):
    import time

    from fastapi.testclient import TestClient

    from src.greenmarket.api.http.app import create_app
    from src.greenmarket.api.http.deps import get_product_service
    from src.greenmarket.runtime.config.config_data import AppConfig

    class SlowProductService:
        def list_products_page(self, page, limit):
            time.sleep(0.5)
            return [], 0

    config = test_config.model_copy(
        update={"app": AppConfig(environment="test", service_timeout_seconds=0.05)}
    )
    app = create_app(config, app_dependencies, setup_logging=False, init_schema=False)
    app.dependency_overrides[get_product_service] = lambda: SlowProductService()

    response = TestClient(app).get("/products")

    assert response.status_code == 500
    assert response.json()["message"] == "request timed out"


def test_unmapped_market_error_uses_kind_status(api_app):
    from fastapi.testclient import TestClient

    @api_app.get("/boom")
    async def boom():
        raise MarketError.authorization("nope")

    response = TestClient(api_app).get("/boom")

    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"
