"""
Eligibility rules — fixed thresholds over wallet activity metrics.

Explainable and rule-based: a wallet passes only when it has at least
MIN_TOTAL_TRANSACTIONS transactions and MIN_UNIQUE_COUNTERPARTIES distinct
counterparties. The failure reason names every shortfall.
"""

from __future__ import annotations

from backend_bizverify.verification.models import ActivityMetrics, Verdict

MIN_TOTAL_TRANSACTIONS = 100
MIN_UNIQUE_COUNTERPARTIES = 10


def _transactions_shortfall(total: int) -> str:
    return f"only {total} transactions (minimum {MIN_TOTAL_TRANSACTIONS} required)"


def _counterparties_shortfall(unique: int) -> str:
    return f"only {unique} unique wallets (minimum {MIN_UNIQUE_COUNTERPARTIES} required)"


def evaluate(metrics: ActivityMetrics) -> Verdict:
    """
    Apply the eligibility thresholds.

    Total and pure: every input yields a Verdict; failure_reason is set iff
    meets_requirements is False.
    """
    low_transactions = metrics.total_transactions < MIN_TOTAL_TRANSACTIONS
    low_counterparties = metrics.unique_counterparties < MIN_UNIQUE_COUNTERPARTIES

    if low_transactions and low_counterparties:
        reason = (
            f"Insufficient activity: {_transactions_shortfall(metrics.total_transactions)} "
            f"and {_counterparties_shortfall(metrics.unique_counterparties)}"
        )
    elif low_transactions:
        reason = f"Insufficient transactions: {_transactions_shortfall(metrics.total_transactions)}"
    elif low_counterparties:
        reason = (
            "Insufficient unique wallets: "
            f"{_counterparties_shortfall(metrics.unique_counterparties)}"
        )
    else:
        return Verdict(meets_requirements=True)
    return Verdict(meets_requirements=False, failure_reason=reason)
