from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlalchemy.exc import IntegrityError

from src.greenmarket.core.errors import MarketError
from src.greenmarket.core.security import (
    generate_verification_code,
    hash_password,
    verify_password,
)
from src.greenmarket.core.services.database.db_session import (
    SessionFactory,
    transaction,
)
from src.greenmarket.core.services.jwt.jwt_gen import JwtGeneratorService
from src.greenmarket.core.services.mail.verification_mailer import VerificationMailer
from src.greenmarket.entities._base import as_utc
from src.greenmarket.entities.user import User, UserRepository
from src.greenmarket.runtime.config.config_data import SecurityConfig

_INVALID_CREDENTIALS = "invalid email or password"
_INVALID_CODE = "verification code is invalid or expired"


class SqlUserService:
    """Registration, login and email verification backed by the relational store.

    Every operation opens and closes its own session, so a call running on a
    worker thread never shares a session with the request that started it.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        jwt_generator: JwtGeneratorService,
        mailer: VerificationMailer,
        security_config: SecurityConfig,
        base_url: str,
    ):
        self._session_factory = session_factory
        self._jwt_generator = jwt_generator
        self._mailer = mailer
        self._security = security_config
        self._base_url = base_url.rstrip("/")

    def _verification_link(self, code: str) -> str:
        return f"{self._base_url}/users/email-verification/{code}"

    def register(self, full_name: str, email: str, password: str) -> User:
        """Create an unverified account and send its verification link.

        The account is only committed once the mail has been handed off, so a
        delivery failure leaves no orphaned row behind.
        """
        email = email.strip().lower()
        full_name = full_name.strip()

        with self._session_factory() as session:
            user_repo = UserRepository(session)
            if user_repo.get_by_email(email) is not None:
                raise MarketError.validation("email already registered")

            code = generate_verification_code()
            expires_at = datetime.now(UTC) + timedelta(
                seconds=self._security.verification_code_ttl_seconds
            )
            new_user = User(
                full_name=full_name,
                email=email,
                password_hash=hash_password(password, self._security.password_hash_rounds),
                verification_code=code,
                verification_expires_at=expires_at,
            )

            try:
                with transaction(session):
                    created = user_repo.create(new_user)
                    self._mailer.send_verification(
                        created.email, created.full_name, self._verification_link(code)
                    )
            except MarketError as e:
                if isinstance(e.__cause__, IntegrityError):
                    # lost a race with a concurrent registration of the same address
                    raise MarketError.validation("email already registered") from e
                raise

        logger.info("Registered user {} ({})", created.id, created.email)
        return created

    def login(self, email: str, password: str) -> tuple[str, User]:
        with self._session_factory() as session:
            user = UserRepository(session).get_by_email(email.strip().lower())

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for {}", email)
            raise MarketError.authentication(_INVALID_CREDENTIALS)

        if self._security.require_verified_email and not user.is_verified:
            raise MarketError.authentication("email is not verified")

        token = self._jwt_generator.generate_access_token(user.id, user.role)
        logger.info("User {} logged in", user.id)
        return token, user

    def verify_email(self, verification_code: str) -> None:
        if not verification_code:
            raise MarketError.authentication(_INVALID_CODE)

        with self._session_factory() as session:
            user_repo = UserRepository(session)
            user = user_repo.get_by_verification_code(verification_code)
            if user is None:
                raise MarketError.authentication(_INVALID_CODE)

            expires_at = as_utc(user.verification_expires_at)
            if expires_at is not None and expires_at < datetime.now(UTC):
                logger.info("Expired verification code used for user {}", user.id)
                raise MarketError.authentication(_INVALID_CODE)

            with transaction(session):
                # a concurrent request may have consumed the code since the lookup
                if not user_repo.mark_verified(verification_code):
                    raise MarketError.authentication(_INVALID_CODE)

        logger.info("Verified email for user {}", user.id)
