from typing import Protocol

import httpx
from loguru import logger

from src.greenmarket.core.errors import MarketError
from src.greenmarket.runtime.config.config_data import MailConfig


class VerificationMailer(Protocol):
    def send_verification(self, to: str, full_name: str, link: str) -> None: ...


def _render(full_name: str, link: str) -> tuple[str, str]:
    subject = "Verify your Green Market account"
    body = (
        f"Hi {full_name},\n\n"
        "Please confirm your email address by opening the link below:\n\n"
        f"{link}\n\n"
        "If you did not create an account you can ignore this message.\n"
    )
    return subject, body


class LogVerificationMailer:
    """Writes the verification link to the log instead of sending mail."""

    def send_verification(self, to: str, full_name: str, link: str) -> None:
        logger.bind(recipient=to).info("Verification link for {}: {}", to, link)


class HttpVerificationMailer:
    """Sends verification mail through an HTTP mail provider."""

    def __init__(self, config: MailConfig, client: httpx.Client | None = None):
        if not config.api_url:
            raise ValueError("mail.api_url is required for HttpVerificationMailer")
        self._config = config
        self._client = client or httpx.Client(timeout=config.timeout_seconds)

    def send_verification(self, to: str, full_name: str, link: str) -> None:
        subject, body = _render(full_name, link)
        payload = {
            "from": {"email": self._config.sender},
            "personalizations": [{"to": [{"email": to}], "subject": subject}],
            "content": [{"type": "text/plain", "value": body}],
        }
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"

        try:
            resp = self._client.post(self._config.api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Mail provider request failed: {}", exc)
            raise MarketError.upstream("failed to send verification email") from exc

        if not 200 <= resp.status_code < 300:
            logger.error(
                "Mail provider rejected message: {} {}", resp.status_code, resp.text[:200]
            )
            raise MarketError.upstream("failed to send verification email")

    def close(self) -> None:
        self._client.close()


def build_verification_mailer(config: MailConfig) -> VerificationMailer:
    if config.api_url:
        return HttpVerificationMailer(config)
    return LogVerificationMailer()
