"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from loguru import logger

from src.greenmarket.api.http.app_data import ApplicationDependencies
from src.greenmarket.core.errors import ErrorKind, MarketError
from src.greenmarket.core.models.auth import Identity
from src.greenmarket.core.services import (
    PaymentsService,
    ProductService,
    SqlPaymentsService,
    SqlProductService,
    SqlUserService,
    UserService,
)
from src.greenmarket.core.services.jwt import JwtVerificationService
from src.greenmarket.runtime.config.config_data import ConfigData


def get_config(request: Request) -> ConfigData:
    """Get the configuration the application was created with."""
    return request.app.state.config


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_service_timeout(config: ConfigData = Depends(get_config)) -> float:
    return config.app.service_timeout_seconds


def get_jwt_verify_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return app_deps.jwt_verify_service


def get_user_service(
    config: ConfigData = Depends(get_config),
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> UserService:
    return SqlUserService(
        app_deps.database_service.get_session,
        app_deps.jwt_generation_service,
        app_deps.mailer,
        config.security,
        config.app.base_url,
    )


def get_product_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ProductService:
    return SqlProductService(app_deps.database_service.get_session)


def get_payments_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> PaymentsService:
    return SqlPaymentsService(app_deps.database_service.get_session)


_AUTH_ERROR_STATUS = {
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
}


async def get_current_identity(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> Identity:
    """Authenticate the request using a Bearer token.

    The verified user id and role are also stored on ``request.state``.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization format")

    try:
        claims = jwt_verify.verify_jwt(parts[1])
    except MarketError as exc:
        status_code = _AUTH_ERROR_STATUS.get(exc.kind, 500)
        logger.info("Rejected bearer token: {}", exc.message)
        raise HTTPException(status_code=status_code, detail=exc.message) from exc

    subject = claims.subject
    if not (subject.isascii() and subject.isdigit()):
        raise HTTPException(status_code=403, detail="Invalid user ID in token")

    identity = Identity(user_id=int(subject), role=claims.role)
    request.state.user_id = identity.user_id
    request.state.role = identity.role
    return identity


async def require_admin(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity


def parse_id(raw: str, message: str | None = None) -> int:
    """Parse a non-negative integer path parameter or fail with 400."""
    if raw.isascii() and raw.isdigit():
        return int(raw)
    raise HTTPException(
        status_code=400,
        detail=message or f'invalid integer value "{raw}"',
    )
