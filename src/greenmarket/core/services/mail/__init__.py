"""Verification mail delivery."""

from .verification_mailer import (
    HttpVerificationMailer,
    LogVerificationMailer,
    VerificationMailer,
    build_verification_mailer,
)

__all__ = [
    "HttpVerificationMailer",
    "LogVerificationMailer",
    "VerificationMailer",
    "build_verification_mailer",
]
