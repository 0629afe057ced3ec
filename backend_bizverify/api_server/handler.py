"""
Verification request handler — framework-independent core of the API.

Sequence per request: authenticate -> parse/validate -> fetch metrics ->
evaluate -> upsert -> envelope. One handler serves both deployment profiles;
Settings.auth_mode decides whether the credential gate is enforced.

Every call returns exactly one HandlerResponse. Store and unexpected failures
reach the caller as a generic message; full detail goes to the logs.
"""

from __future__ import annotations

import hmac
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from backend_bizverify.config.settings import Settings
from backend_bizverify.core.exceptions import (
    AuthError,
    RecordNotFoundError,
    StoreError,
    UnexpectedError,
    ValidationError,
    VerificationServiceError,
)
from backend_bizverify.database.store import VerificationStore
from backend_bizverify.verification.evaluator import evaluate
from backend_bizverify.verification.models import VerificationRecord, VerificationRequest
from backend_bizverify.verification.oracle import MetricsProvider
from backend_bizverify.verification.validator import parse_request_body, validate_payload
from backend_bizverify.verify_logging import bind_wallet, get_logger

logger = get_logger(__name__)

BASE_ALLOWED_HEADERS = ("authorization", "x-client-info", "apikey", "content-type")


def cors_headers(settings: Settings) -> dict[str, str]:
    allowed = list(BASE_ALLOWED_HEADERS)
    if settings.auth_header not in allowed:
        allowed.append(settings.auth_header)
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": ", ".join(allowed),
        "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    }


@dataclass
class HandlerResponse:
    """Transport-agnostic response: status, JSON body (None for 204), headers."""

    status_code: int
    body: dict[str, Any] | None
    headers: dict[str, str] = field(default_factory=dict)


def success_envelope(record: VerificationRecord) -> dict[str, Any]:
    return {"success": True, "data": record.to_dict()}


def error_envelope(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}


class VerificationHandler:
    """Orchestrates the verification pipeline for one request at a time; holds no per-request state."""

    def __init__(
        self,
        settings: Settings,
        store: VerificationStore,
        metrics_provider: MetricsProvider,
    ) -> None:
        self._settings = settings
        self._store = store
        self._metrics = metrics_provider
        self._cors = cors_headers(settings)

    # --- Entry points ---

    def handle(
        self,
        method: str,
        headers: Mapping[str, str],
        body: bytes | str | None,
    ) -> HandlerResponse:
        """Handle a verify-business call (POST) or its preflight (OPTIONS)."""
        if method.upper() == "OPTIONS":
            return HandlerResponse(status_code=204, body=None, headers=dict(self._cors))
        try:
            self.authenticate(headers)
            request = validate_payload(parse_request_body(body))
            record = self.verify(request)
        except Exception as e:
            return self._error_response(e, operation="verify_business")
        return self._respond(200, success_envelope(record))

    def lookup(self, headers: Mapping[str, str], wallet_address: str) -> HandlerResponse:
        """Return the stored verification for a wallet (same auth gate as verify)."""
        try:
            self.authenticate(headers)
            wallet = (wallet_address or "").strip()
            record = self._store.get(wallet)
            if record is None:
                raise RecordNotFoundError()
        except Exception as e:
            return self._error_response(e, operation="lookup_verification")
        return self._respond(200, success_envelope(record))

    # --- Pipeline steps ---

    def authenticate(self, headers: Mapping[str, str]) -> None:
        """
        Enforce the credential gate in token mode; no-op otherwise.

        Raises:
            AuthError: credential absent or not an exact match.
        """
        if not self._settings.requires_auth:
            return
        supplied = self._credential_from(headers)
        expected = self._settings.auth_token or ""
        if not supplied or not hmac.compare_digest(
            supplied.encode("utf-8"), expected.encode("utf-8")
        ):
            raise AuthError()

    def verify(self, request: VerificationRequest) -> VerificationRecord:
        log = bind_wallet(request.wallet_address, __name__)
        log.info("verification_requested", business_name=request.business_name)
        metrics = self._metrics.fetch_metrics(request.wallet_address)
        verdict = evaluate(metrics)
        log.info(
            "verification_evaluated",
            total_transactions=metrics.total_transactions,
            unique_counterparties=metrics.unique_counterparties,
            meets_requirements=verdict.meets_requirements,
        )
        return self._store.upsert(VerificationRecord.from_verdict(request, metrics, verdict))

    # --- Helpers ---

    def _credential_from(self, headers: Mapping[str, str]) -> str | None:
        lowered = {k.lower(): v for k, v in headers.items()}
        token = (lowered.get(self._settings.auth_header) or "").strip()
        if token:
            return token
        auth = (lowered.get("authorization") or "").strip()
        scheme, _, value = auth.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
        return None

    def _respond(self, status_code: int, body: dict[str, Any]) -> HandlerResponse:
        headers = dict(self._cors)
        headers["Content-Type"] = "application/json"
        return HandlerResponse(status_code=status_code, body=body, headers=headers)

    def _error_response(self, exc: Exception, *, operation: str) -> HandlerResponse:
        if isinstance(exc, (ValidationError, AuthError, RecordNotFoundError)):
            logger.warning(
                f"{operation}_rejected",
                error_class=type(exc).__name__,
                status_code=exc.status_code,
                error=exc.public_message,
            )
            return self._respond(exc.status_code, error_envelope(exc.public_message))
        if isinstance(exc, StoreError):
            logger.error(
                f"{operation}_store_failed",
                error=exc.public_message,
                cause=repr(exc.__cause__),
            )
            return self._respond(exc.status_code, error_envelope(exc.public_message))
        if isinstance(exc, VerificationServiceError):
            logger.error(f"{operation}_failed", error=exc.public_message)
            return self._respond(exc.status_code, error_envelope(exc.public_message))
        logger.exception(f"{operation}_unexpected_error", error=str(exc))
        wrapped = UnexpectedError()
        return self._respond(wrapped.status_code, error_envelope(wrapped.public_message))
