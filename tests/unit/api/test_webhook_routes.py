import pytest

from src.greenmarket.core.errors import MarketError
from src.greenmarket.runtime.config.config_data import PaymentsConfig
from tests.fixtures.core import CALLBACK_TOKEN

INVOICE = {
    "id": "inv-579",
    "external_id": "order-1",
    "user_id": "5f9f",
    "amount": 150000,
    "status": "PAID",
    "currency": "IDR",
    "payment_method": "BANK_TRANSFER",
    "payment_channel": "BCA",
    "created": "2024-03-01T10:00:00Z",
    "updated": "2024-03-01T10:05:00Z",
    "metadata": {"purpose": "checkout"},
    "items": [{"name": "Organic Spinach", "price": 25000, "quantity": 6}],
    "some_new_gateway_field": True,
}


def test_valid_callback_is_forwarded(client, fake_payments_service):
    response = client.post(
        "/webhooks/payments",
        json=INVOICE,
        headers={"x-callback-token": CALLBACK_TOKEN},
    )

    assert response.status_code == 200
    [event] = fake_payments_service.events
    assert event.id == "inv-579"
    assert event.status == "PAID"
    assert event.metadata.purpose == "checkout"
    assert event.items[0].quantity == 6


@pytest.mark.parametrize(
    "headers",
    [{}, {"x-callback-token": "wrong"}, {"x-callback-token": ""}],
)
def test_bad_token_is_rejected(client, fake_payments_service, headers):
    response = client.post("/webhooks/payments", json=INVOICE, headers=headers)

    assert response.status_code == 401
    assert fake_payments_service.events == []


def test_token_checked_before_body(client):
    response = client.post(
        "/webhooks/payments",
        content=b"{broken",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 401


def test_unconfigured_token_rejects_everything(test_config, app_dependencies, fake_payments_service):
    from fastapi.testclient import TestClient

    from src.greenmarket.api.http.app import create_app
    from src.greenmarket.api.http.deps import get_payments_service

    config = test_config.model_copy(update={"payments": PaymentsConfig(callback_token="")})
    app = create_app(config, app_dependencies, setup_logging=False, init_schema=False)
    app.dependency_overrides[get_payments_service] = lambda: fake_payments_service

    response = TestClient(app).post(
        "/webhooks/payments", json=INVOICE, headers={"x-callback-token": ""}
    )

    assert response.status_code == 401


def test_invalid_body(client, fake_payments_service):
    response = client.post(
        "/webhooks/payments",
        content=b"{broken",
        headers={"x-callback-token": CALLBACK_TOKEN, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"
    assert fake_payments_service.events == []


def test_wrongly_typed_field(client):
    response = client.post(
        "/webhooks/payments",
        json={**INVOICE, "amount": "lots"},
        headers={"x-callback-token": CALLBACK_TOKEN},
    )

    assert response.status_code == 400


def test_service_error(client, fake_payments_service):
    fake_payments_service.error = MarketError.upstream("database error")

    response = client.post(
        "/webhooks/payments",
        json=INVOICE,
        headers={"x-callback-token": CALLBACK_TOKEN},
    )

    assert response.status_code == 500
