from __future__ import annotations

from collections.abc import Callable, Generator
from functools import partial

import pytest
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.greenmarket.core.services.jwt import (
    JwtGeneratorService,
    JwtVerificationService,
)
from src.greenmarket.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    JWTConfig,
    PaymentsConfig,
    SecurityConfig,
)

JWT_SECRET = "test-signing-secret-with-enough-length"
CALLBACK_TOKEN = "test-callback-token"
JWT_ISSUER = "greenmarket-test"


@pytest.fixture
def test_config() -> ConfigData:
    """Configuration used by service and API tests."""
    return ConfigData(
        app=AppConfig(
            environment="test",
            public_url="http://testserver",
            service_timeout_seconds=5,
        ),
        jwt=JWTConfig(secret=JWT_SECRET, issuer=JWT_ISSUER),
        # lowest bcrypt cost keeps hashing fast
        security=SecurityConfig(password_hash_rounds=4),
        payments=PaymentsConfig(callback_token=CALLBACK_TOKEN),
        database=DatabaseConfig(url="sqlite:///:memory:"),
    )


@pytest.fixture
def jwt_generator(test_config: ConfigData) -> JwtGeneratorService:
    return JwtGeneratorService(test_config.jwt)


@pytest.fixture
def jwt_verifier(test_config: ConfigData) -> JwtVerificationService:
    return JwtVerificationService(test_config.jwt)


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory database with every table."""
    # Create a unique engine for each test to avoid metadata conflicts
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.greenmarket.entities import (  # noqa: F401
        CategoryTable,
        PaymentTable,
        ProductTable,
        UserTable,
    )

    # Create all tables - each test gets a fresh database
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> Callable[[], Session]:
    """Session factory handed to the services under test."""
    return partial(Session, engine, expire_on_commit=False)


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Session used by tests to seed and inspect the database."""
    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()
