"""
Domain models for the verification pipeline.

Request, metrics, and verdict are transient per call; VerificationRecord is the
durable row shape returned by the store. No ORM coupling so the store backend
stays swappable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


def status_for(meets_requirements: bool) -> str:
    """verificationStatus is derived 1:1 from meetsRequirements."""
    return STATUS_APPROVED if meets_requirements else STATUS_REJECTED


@dataclass(frozen=True)
class VerificationRequest:
    """Validated, trimmed request triple."""

    wallet_address: str
    business_name: str
    external_user_id: str


@dataclass(frozen=True)
class ActivityMetrics:
    """Activity metrics for a wallet, as reported by a metrics provider."""

    total_transactions: int
    unique_counterparties: int


@dataclass(frozen=True)
class Verdict:
    meets_requirements: bool
    failure_reason: str | None = None

    @property
    def verification_status(self) -> str:
        return status_for(self.meets_requirements)


@dataclass
class VerificationRecord:
    """One verification per wallet; overwritten on every re-verification."""

    wallet_address: str
    business_name: str
    external_user_id: str
    total_transactions: int
    unique_counterparties: int
    meets_requirements: bool
    failure_reason: str | None = None
    id: int | None = None
    """Store-assigned identity; None until persisted."""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def verification_status(self) -> str:
        return status_for(self.meets_requirements)

    @classmethod
    def from_verdict(
        cls,
        request: VerificationRequest,
        metrics: ActivityMetrics,
        verdict: Verdict,
    ) -> VerificationRecord:
        return cls(
            wallet_address=request.wallet_address,
            business_name=request.business_name,
            external_user_id=request.external_user_id,
            total_transactions=metrics.total_transactions,
            unique_counterparties=metrics.unique_counterparties,
            meets_requirements=verdict.meets_requirements,
            failure_reason=None if verdict.meets_requirements else verdict.failure_reason,
        )

    def to_dict(self) -> dict[str, Any]:
        """Response shape (camelCase). failureReason is omitted for approved records."""
        data: dict[str, Any] = {
            "id": self.id,
            "walletAddress": self.wallet_address,
            "businessName": self.business_name,
            "externalUserId": self.external_user_id,
            "totalTransactions": self.total_transactions,
            "uniqueCounterparties": self.unique_counterparties,
            "meetsRequirements": self.meets_requirements,
            "verificationStatus": self.verification_status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if not self.meets_requirements:
            data["failureReason"] = self.failure_reason
        return data
