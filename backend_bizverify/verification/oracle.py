"""
Wallet activity metrics — pluggable provider plus the placeholder oracle.

MockPiNetworkOracle stands in for a real ledger client: metrics are a pure
function of the wallet string, so re-verifying a wallet reproduces the same
verdict. Distinct wallets can collide on the same metrics; that is accepted
for a stand-in and nothing downstream relies on metric uniqueness.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from backend_bizverify.verification.models import ActivityMetrics
from backend_bizverify.verify_logging import get_logger

logger = get_logger(__name__)

TRANSACTIONS_BASE = 50
TRANSACTIONS_SPAN = 500  # -> [50, 549]
COUNTERPARTIES_BASE = 10
COUNTERPARTIES_SPAN = 150  # -> [10, 159]


def _char_code_sum(wallet_address: str) -> int:
    """Sum of UTF-16 code units, order-independent but content-dependent."""
    raw = wallet_address.encode("utf-16-le")
    return sum(int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2))


def derive_metrics(wallet_address: str) -> ActivityMetrics:
    """
    Deterministic metrics for a wallet address.

    totalTransactions lands in [50, 549], uniqueCounterparties in [10, 159].
    Never raises for a string input.
    """
    h = _char_code_sum(wallet_address)
    return ActivityMetrics(
        total_transactions=h % TRANSACTIONS_SPAN + TRANSACTIONS_BASE,
        unique_counterparties=h % COUNTERPARTIES_SPAN + COUNTERPARTIES_BASE,
    )


class MetricsProvider(ABC):
    """Source of wallet activity metrics; swap the mock for a ledger client here."""

    @abstractmethod
    def fetch_metrics(self, wallet_address: str) -> ActivityMetrics:
        ...


class MockPiNetworkOracle(MetricsProvider):
    """Placeholder oracle backed by derive_metrics, with optional simulated latency."""

    def __init__(self, *, simulated_latency_sec: float = 0.0) -> None:
        self._latency = max(0.0, simulated_latency_sec)

    def fetch_metrics(self, wallet_address: str) -> ActivityMetrics:
        if self._latency:
            time.sleep(self._latency)
        metrics = derive_metrics(wallet_address)
        logger.debug(
            "oracle_metrics_derived",
            wallet=wallet_address,
            total_transactions=metrics.total_transactions,
            unique_counterparties=metrics.unique_counterparties,
        )
        return metrics
