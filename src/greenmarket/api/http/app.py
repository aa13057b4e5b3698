"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from src.greenmarket.api.http.app_data import ApplicationDependencies
from src.greenmarket.api.http.errors import error_response, register_exception_handlers
from src.greenmarket.api.http.routers import (
    health_router,
    products_router,
    users_router,
    webhooks_router,
)
from src.greenmarket.api.utils.app_startup import configure_logging
from src.greenmarket.core.services.database import DbManageService
from src.greenmarket.runtime.config.config_data import ConfigData
from src.greenmarket.runtime.context import get_config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str):
        super().__init__(app)
        self._environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if self._environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


async def log_requests(request: Request, call_next):
    """Correlate each request with an id and log its outcome."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start {} {}", request.method, request.url.path)
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error {} {}", request.method, request.url.path)
            return error_response(request, 500, "Internal server error")

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end {} {}", response.status_code, request.url.path)

        response.headers.setdefault("X-Request-ID", request_id)
        return response


def create_app(
    config: ConfigData | None = None,
    dependencies: ApplicationDependencies | None = None,
    *,
    setup_logging: bool = True,
    init_schema: bool = True,
) -> FastAPI:
    """Build the API application.

    Args:
        config: Configuration to run with; defaults to the loaded config.yaml
        dependencies: Pre-built services, mostly for tests
        setup_logging: Configure loguru sinks and stdlib interception
        init_schema: Create missing tables on startup
    """
    config = config or get_config()
    if setup_logging:
        configure_logging(config)

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app_deps = dependencies or ApplicationDependencies.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up application in {} environment", config.app.environment)
        if init_schema:
            DbManageService(app_deps.database_service.engine).create_all()
        try:
            yield
        finally:
            logger.info("Shutting down application")
            app_deps.close()

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Green Market API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.config = config
    app.state.app_dependencies = app_deps

    register_exception_handlers(app)

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(products_router)
    app.include_router(webhooks_router)

    return app
