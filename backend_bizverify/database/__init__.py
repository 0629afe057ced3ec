"""
Database layer — keyed upsert store for business verifications.

SQLAlchemy over SQLite by default; PostgreSQL via URL.
"""

from backend_bizverify.database.models import Base, BusinessVerification
from backend_bizverify.database.store import (
    KeyedUpsertStore,
    VerificationStore,
    get_store,
    reset_stores_for_test,
    utc_now,
)

__all__ = [
    "Base",
    "BusinessVerification",
    "KeyedUpsertStore",
    "VerificationStore",
    "get_store",
    "reset_stores_for_test",
    "utc_now",
]
