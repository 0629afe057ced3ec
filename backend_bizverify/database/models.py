"""
SQLAlchemy table for business verifications.

One row per wallet address (unique constraint = upsert conflict key).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

from backend_bizverify.verification.models import VerificationRecord, status_for

Base = declarative_base()

CONFLICT_KEY = "wallet_address"


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class BusinessVerification(Base):
    """Latest verification verdict for a wallet."""

    __tablename__ = "business_verifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_address = Column(String(128), unique=True, nullable=False, index=True)
    business_name = Column(String(256), nullable=False)
    external_user_id = Column(String(256), nullable=False)
    total_transactions = Column(Integer, nullable=False)
    unique_counterparties = Column(Integer, nullable=False)
    meets_requirements = Column(Boolean, nullable=False)
    failure_reason = Column(Text, nullable=True)
    verification_status = Column(String(16), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def to_record(self) -> VerificationRecord:
        return VerificationRecord(
            id=self.id,
            wallet_address=self.wallet_address,
            business_name=self.business_name,
            external_user_id=self.external_user_id,
            total_transactions=self.total_transactions,
            unique_counterparties=self.unique_counterparties,
            meets_requirements=bool(self.meets_requirements),
            failure_reason=self.failure_reason,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


def record_to_row_values(record: VerificationRecord, now: datetime) -> dict[str, Any]:
    """Column values for an upsert; id is left to the database."""
    return {
        "wallet_address": record.wallet_address,
        "business_name": record.business_name,
        "external_user_id": record.external_user_id,
        "total_transactions": record.total_transactions,
        "unique_counterparties": record.unique_counterparties,
        "meets_requirements": record.meets_requirements,
        "failure_reason": None if record.meets_requirements else record.failure_reason,
        "verification_status": status_for(record.meets_requirements),
        "created_at": now,
        "updated_at": now,
    }
