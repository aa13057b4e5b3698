"""Error envelope and exception handlers.

Every error response has the shape::

    {"success": false, "error": "<STATUS_NAME>", "message": "...",
     "details": ..., "request_id": "..."}

``details`` is omitted when there is nothing to add.
"""

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.greenmarket.core.errors import ErrorKind, MarketError


def _status_name(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "ERROR"


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get(
        "X-Request-ID", "-"
    )


def error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Any = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    request_id = request_id_of(request)
    body: dict[str, Any] = {
        "success": False,
        "error": _status_name(status_code),
        "message": message,
    }
    if details is not None:
        body["details"] = jsonable_encoder(details)
    body["request_id"] = request_id

    response_headers = dict(headers or {})
    response_headers.setdefault("X-Request-ID", request_id)
    return JSONResponse(status_code=status_code, content=body, headers=response_headers)


def http_error_for(
    exc: MarketError,
    status_map: Mapping[ErrorKind, int] | None = None,
    default: int = 500,
) -> HTTPException:
    """Translate a service error into the HTTP error a handler responds with.

    Args:
        exc: Error raised by the service layer
        status_map: Status per error kind; kinds not listed get ``default``
        default: Status for unmapped kinds
    """
    status_code = (status_map or {}).get(exc.kind, default)
    logger.bind(error_kind=exc.kind.value, status_code=status_code).warning(
        "Service call failed: {}", exc.message
    )
    return HTTPException(status_code=status_code, detail=exc.message)


def _log_handled(request: Request, status_code: int, message: str) -> None:
    log = logger.bind(
        path=request.url.path,
        method=request.method,
        status_code=status_code,
        request_id=request_id_of(request),
    )
    if status_code >= 500:
        log.error("{} {} failed: {}", request.method, request.url.path, message)
    else:
        log.info("{} {} rejected: {}", request.method, request.url.path, message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        message, details = HTTPStatus(exc.status_code).phrase, exc.detail
    _log_handled(request, exc.status_code, message)
    return error_response(
        request, exc.status_code, message, details, headers=getattr(exc, "headers", None)
    )


def _validation_message(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        prefix = ".".join(loc)
        parts.append(f"{prefix}: {error.get('msg')}" if prefix else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(exc.errors())
    message = _validation_message(errors)
    _log_handled(request, 400, message)
    return error_response(request, 400, message, details=errors)


async def market_error_handler(request: Request, exc: MarketError) -> JSONResponse:
    status_code = exc.kind.status_code
    _log_handled(request, status_code, exc.message)
    return error_response(request, status_code, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(MarketError, market_error_handler)
