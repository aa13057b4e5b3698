"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTConfig(BaseModel):
    """Access token signing and validation configuration."""

    secret: str | None = Field(
        default=None, description="Shared secret used to sign and verify access tokens"
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", description="HMAC algorithm used for access tokens"
    )
    issuer: str = Field(
        default="greenmarket-api", description="Issuer claim written into tokens"
    )
    access_token_ttl_seconds: int = Field(
        default=24 * 3600, description="Lifetime of access tokens issued on login"
    )


class SecurityConfig(BaseModel):
    """Password and account verification settings."""

    password_hash_rounds: int = Field(
        default=12, ge=4, le=31, description="bcrypt cost factor"
    )
    verification_code_ttl_seconds: int = Field(
        default=24 * 3600, description="How long an email verification code stays valid"
    )
    require_verified_email: bool = Field(
        default=True, description="Reject logins until the email address is verified"
    )


class PaymentsConfig(BaseModel):
    """Payment gateway webhook configuration."""

    callback_token: str = Field(
        default="",
        description="Shared secret the gateway sends in the x-callback-token header",
    )


class MailConfig(BaseModel):
    """Outgoing email provider configuration.

    Without ``api_url`` verification links are only written to the log.
    """

    api_url: str | None = Field(default=None, description="HTTP mail provider endpoint")
    api_key: str | None = Field(default=None, description="Provider API key")
    sender: str = Field(default="no-reply@greenmarket.local", description="From address")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout for the provider")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./greenmarket.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the database password from a secrets file or environment variable.

        Falls back to whatever password is embedded in the URL.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            return password

        from sqlalchemy.engine import make_url

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.drivername.startswith("sqlite"):
            return self.url

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            base_url = base_url.set(password=resolved_password)
        # render_as_string keeps the password; str() would mask it
        return base_url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    public_url: str | None = Field(
        default=None,
        description="Externally reachable base URL used in verification links",
    )
    service_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single service call made by a handler",
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        if self.public_url:
            return self.public_url.rstrip("/")
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Access token configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
    payments: PaymentsConfig = Field(
        default_factory=PaymentsConfig, description="Payment webhook configuration"
    )
    mail: MailConfig = Field(
        default_factory=MailConfig, description="Outgoing email configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
