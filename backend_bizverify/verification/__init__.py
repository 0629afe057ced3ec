"""
Verification pipeline — validator, metrics oracle, and eligibility evaluator.

All three are pure (the oracle's optional simulated latency aside); I/O lives
in the database and api_server packages.
"""

from backend_bizverify.verification.evaluator import (
    MIN_TOTAL_TRANSACTIONS,
    MIN_UNIQUE_COUNTERPARTIES,
    evaluate,
)
from backend_bizverify.verification.models import (
    STATUS_APPROVED,
    STATUS_REJECTED,
    ActivityMetrics,
    Verdict,
    VerificationRecord,
    VerificationRequest,
)
from backend_bizverify.verification.oracle import (
    MetricsProvider,
    MockPiNetworkOracle,
    derive_metrics,
)
from backend_bizverify.verification.validator import (
    parse_request_body,
    validate_payload,
    validate_request,
)

__all__ = [
    "MIN_TOTAL_TRANSACTIONS",
    "MIN_UNIQUE_COUNTERPARTIES",
    "STATUS_APPROVED",
    "STATUS_REJECTED",
    "ActivityMetrics",
    "MetricsProvider",
    "MockPiNetworkOracle",
    "Verdict",
    "VerificationRecord",
    "VerificationRequest",
    "derive_metrics",
    "evaluate",
    "parse_request_body",
    "validate_payload",
    "validate_request",
]
