"""
Verification store — idempotent upsert keyed by wallet address.

Uses SQLAlchemy; BIZVERIFY_DB_URL / DATABASE_URL selects PostgreSQL, otherwise
SQLite. Each upsert is a single INSERT ... ON CONFLICT DO UPDATE followed by a
read-back, both inside one transaction, so a call fully applies or fully fails.
Concurrent upserts of the same wallet are last-writer-wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Table, create_engine, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from backend_bizverify.core.exceptions import StoreError
from backend_bizverify.database.models import (
    CONFLICT_KEY,
    Base,
    BusinessVerification,
    record_to_row_values,
)
from backend_bizverify.verification.models import VerificationRecord
from backend_bizverify.verify_logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _redact_url(url: str) -> str:
    return url.split("?")[0].split("@")[-1].split("//")[-1]


def create_store_engine(url: str) -> Engine:
    connect_args: dict[str, Any] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
    logger.info("verification_store_engine", url=_redact_url(url), dialect=engine.dialect.name)
    return engine


class KeyedUpsertStore:
    """
    Generic insert-or-update by a unique column.

    upsert(table, values, conflict_key) writes one row and returns it as a dict.
    Columns named in preserve keep their stored value on conflict.
    """

    def __init__(self, engine: Engine) -> None:
        dialect = engine.dialect.name
        if dialect not in _DIALECT_INSERTS:
            raise ValueError(f"Unsupported database dialect for upsert: {dialect}")
        self._engine = engine
        self._insert = _DIALECT_INSERTS[dialect]

    @property
    def engine(self) -> Engine:
        return self._engine

    def upsert(
        self,
        table: Table,
        values: Mapping[str, Any],
        conflict_key: str,
        *,
        preserve: Iterable[str] = (),
    ) -> dict[str, Any]:
        keep = set(preserve) | {conflict_key}
        keep.update(c.name for c in table.primary_key.columns)
        stmt = self._insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[conflict_key],
            set_={k: stmt.excluded[k] for k in values if k not in keep},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
                row = conn.execute(
                    select(table).where(table.c[conflict_key] == values[conflict_key])
                ).mappings().one()
        except SQLAlchemyError as e:
            raise StoreError() from e
        return dict(row)

    def fetch_one(self, table: Table, key: str, value: Any) -> dict[str, Any] | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(select(table).where(table.c[key] == value)).mappings().first()
        except SQLAlchemyError as e:
            raise StoreError() from e
        return dict(row) if row is not None else None


class VerificationStore:
    """Business verifications, one row per wallet address."""

    def __init__(self, engine: Engine, *, clock: Clock = utc_now) -> None:
        self._upserter = KeyedUpsertStore(engine)
        self._clock = clock
        self._table: Table = BusinessVerification.__table__

    @property
    def engine(self) -> Engine:
        return self._upserter.engine

    def ensure_schema(self) -> None:
        """Create tables if they do not exist. Safe to call on every startup."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.exception("verification_store_schema_failed", error=str(e))
            raise StoreError() from e

    def upsert(self, record: VerificationRecord) -> VerificationRecord:
        """
        Insert a new verification or overwrite the existing one for the wallet.

        id and created_at survive an overwrite; every other column, including
        updated_at, is replaced.

        Raises:
            StoreError: on any persistence failure.
        """
        values = record_to_row_values(record, self._clock())
        try:
            row = self._upserter.upsert(
                self._table, values, CONFLICT_KEY, preserve=("created_at",)
            )
        except StoreError as e:
            logger.error(
                "verification_upsert_failed",
                wallet=record.wallet_address,
                error=repr(e.__cause__),
            )
            raise
        stored = BusinessVerification(**row).to_record()
        logger.info(
            "verification_upserted",
            wallet=stored.wallet_address,
            verification_id=stored.id,
            status=stored.verification_status,
        )
        return stored

    def get(self, wallet_address: str) -> VerificationRecord | None:
        """Return the stored verification for a wallet, or None."""
        row = self._upserter.fetch_one(self._table, CONFLICT_KEY, wallet_address.strip())
        return BusinessVerification(**row).to_record() if row else None


_stores: dict[str, VerificationStore] = {}


def get_store(url: str, *, clock: Clock = utc_now) -> VerificationStore:
    """
    Return a VerificationStore for url, creating the schema on first use.
    Stores (and their engines) are cached per URL.
    """
    store = _stores.get(url)
    if store is None:
        store = VerificationStore(create_store_engine(url), clock=clock)
        store.ensure_schema()
        _stores[url] = store
    return store


def reset_stores_for_test() -> None:
    """Dispose cached engines. For tests only."""
    for store in _stores.values():
        store.engine.dispose()
    _stores.clear()
