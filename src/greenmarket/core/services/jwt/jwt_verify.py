"""JWT verification service."""

from datetime import UTC, datetime

from authlib.jose import JoseError, JsonWebToken
from loguru import logger

from src.greenmarket.core.errors import MarketError
from src.greenmarket.core.models.auth import TokenClaims
from src.greenmarket.runtime.config.config_data import JWTConfig


def _timestamp(value) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(int(value), UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


class JwtVerificationService:
    """Verifies access tokens issued by :class:`JwtGeneratorService`.

    A bad signature or malformed token is an authentication failure; a token
    that verifies but has no usable or a past expiration is an authorization
    failure.
    """

    def __init__(self, config: JWTConfig):
        self._config = config
        self._jwt = JsonWebToken([config.algorithm])

    def verify_jwt(self, token: str, now: datetime | None = None) -> TokenClaims:
        secret = self._config.secret
        if not secret:
            raise MarketError.upstream("JWT signing secret not configured")

        try:
            claims = self._jwt.decode(token, secret)
        except (JoseError, ValueError, TypeError) as exc:
            logger.debug("JWT decode failed: {}", exc)
            raise MarketError.authentication("Invalid token") from exc

        if claims.get("iss") != self._config.issuer:
            logger.debug("JWT issuer mismatch: {!r}", claims.get("iss"))
            raise MarketError.authentication("Invalid token")

        expires_at = _timestamp(claims.get("exp"))
        if expires_at is None:
            raise MarketError.authorization("Status Forbidden")

        token_claims = TokenClaims(
            subject=str(claims.get("sub", "")),
            role=str(claims.get("role", "")),
            issuer=claims.get("iss"),
            issued_at=_timestamp(claims.get("iat")),
            expires_at=expires_at,
            custom_claims={
                k: v
                for k, v in claims.items()
                if k not in {"iss", "sub", "exp", "iat", "nbf", "jti", "role"}
            },
        )
        if token_claims.is_expired(now):
            raise MarketError.authorization("Status Forbidden")
        return token_claims
