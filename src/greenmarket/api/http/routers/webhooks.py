"""Payment gateway callbacks."""

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from src.greenmarket.api.http.deps import (
    get_config,
    get_payments_service,
    get_service_timeout,
)
from src.greenmarket.api.http.errors import http_error_for
from src.greenmarket.api.utils.bounded_call import bounded_call
from src.greenmarket.core.errors import MarketError
from src.greenmarket.core.models.payments import WebhookRequest
from src.greenmarket.core.security import secrets_match
from src.greenmarket.core.services import PaymentsService
from src.greenmarket.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/payments")
async def payments_webhook(
    request: Request,
    config: ConfigData = Depends(get_config),
    payments_service: PaymentsService = Depends(get_payments_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, str]:
    # token is checked before the body is read
    received_token = request.headers.get("x-callback-token")
    if not secrets_match(received_token, config.payments.callback_token):
        logger.warning("Rejected payment callback with invalid token")
        raise HTTPException(status_code=401, detail="Invalid callback token")

    body = await request.body()
    try:
        event = WebhookRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.info("Malformed payment callback: {}", exc.error_count())
        raise HTTPException(status_code=400, detail="Invalid request") from exc

    logger.info("Received payment callback {} ({})", event.id, event.status)
    try:
        await bounded_call(timeout, payments_service.receive_payment_webhook, event)
    except MarketError as exc:
        raise http_error_for(exc) from exc

    return {"message": "OK"}
