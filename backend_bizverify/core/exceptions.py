"""
Application-level exceptions.

Every error that can end a verification request derives from
VerificationServiceError and carries the HTTP status class and the message
that is safe to show to callers. Operator detail stays in the exception chain
and the logs.
"""

from __future__ import annotations


class VerificationServiceError(Exception):
    """Base class; status_code and public_message shape the error envelope."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.public_message = message or self.default_message
        super().__init__(self.public_message)


class ValidationError(VerificationServiceError):
    """Caller input is malformed. Recoverable by correcting the input."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(VerificationServiceError):
    """Caller credential is missing or does not match."""

    status_code = 401
    default_message = "Unauthorized"


class StoreError(VerificationServiceError):
    """Persistence failure (connectivity, constraint). Caller may retry."""

    status_code = 500
    default_message = "Verification could not be saved. Please try again."


class UnexpectedError(VerificationServiceError):
    """Anything not anticipated; same caller visibility as StoreError."""

    status_code = 500
    default_message = "An unexpected error occurred"


class RecordNotFoundError(VerificationServiceError):
    """Lookup of a wallet that has never been verified."""

    status_code = 404
    default_message = "No verification found for this wallet"
