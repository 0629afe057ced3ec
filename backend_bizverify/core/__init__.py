"""
Core utilities — error taxonomy and cross-cutting concerns shared by the
verification pipeline, the store adapter, and the API server.
"""

from backend_bizverify.core.exceptions import (
    AuthError,
    RecordNotFoundError,
    StoreError,
    UnexpectedError,
    ValidationError,
    VerificationServiceError,
)

__all__ = [
    "AuthError",
    "RecordNotFoundError",
    "StoreError",
    "UnexpectedError",
    "ValidationError",
    "VerificationServiceError",
]
