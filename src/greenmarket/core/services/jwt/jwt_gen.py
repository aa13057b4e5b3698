import time
from typing import Any

from authlib.jose import JoseError, JsonWebToken
from loguru import logger

from src.greenmarket.core.errors import MarketError
from src.greenmarket.runtime.config.config_data import JWTConfig

_REGISTERED_CLAIMS = {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}


class JwtGeneratorService:
    """Service for generating signed access tokens."""

    def __init__(self, config: JWTConfig):
        self._config = config
        self._jwt = JsonWebToken([config.algorithm])

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        include_jti: bool = True,
    ) -> str:
        """Generate a signed JWT using authlib.

        Args:
            subject: Subject (sub) claim, the numeric user id as a string
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime; defaults to the configured TTL
            include_jti: Whether to include a unique JWT ID claim

        Returns:
            Signed JWT token string

        Raises:
            MarketError: If the signing secret is missing or encoding fails
        """
        from authlib.common.security import generate_token

        secret = self._config.secret
        if not secret:
            raise MarketError.upstream("JWT signing secret not configured")

        now = int(time.time())
        ttl = (
            self._config.access_token_ttl_seconds
            if expires_in_seconds is None
            else expires_in_seconds
        )
        payload: dict[str, Any] = {
            "iss": self._config.issuer,
            "sub": subject,
            "iat": now,
            "exp": now + ttl,
        }
        if include_jti:
            payload["jti"] = generate_token(16)

        if claims:
            payload.update(
                {k: v for k, v in claims.items() if k not in _REGISTERED_CLAIMS}
            )

        header = {"alg": self._config.algorithm, "typ": "JWT"}
        try:
            token = self._jwt.encode(header, payload, secret)
        except JoseError as e:
            logger.error("JWT encoding failed: {}", e)
            raise MarketError.upstream(f"JWT encoding failed: {e}") from e

        return token.decode() if isinstance(token, bytes) else token

    def generate_access_token(
        self,
        user_id: int,
        role: str,
        expires_in_seconds: int | None = None,
        **extra_claims: Any,
    ) -> str:
        """Generate the access token handed out on login.

        Example:
            token = service.generate_access_token(42, "admin")
        """
        claims = {"role": role, **extra_claims}
        return self.generate_jwt(
            subject=str(user_id),
            claims=claims,
            expires_in_seconds=expires_in_seconds,
        )
