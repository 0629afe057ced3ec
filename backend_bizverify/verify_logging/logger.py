"""
Structured logging for the verification service.

Every line carries timestamp, level, logger name, event_type, and any bound
context (request_id from the HTTP middleware, wallet from bind_wallet).
Wallet values are shortened by a processor, so callers may bind full addresses.

Depends only on structlog and stdlib logging; no backend_bizverify imports.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

WALLET_KEYS = ("wallet", "wallet_address")
WALLET_KEEP = 12


def short_wallet(wallet: str | None, keep: int = WALLET_KEEP) -> str:
    """Truncate a wallet address for log output."""
    if not wallet:
        return ""
    return wallet if len(wallet) <= keep else wallet[:keep] + "..."


def _shorten_wallets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in WALLET_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = short_wallet(value)
    return event_dict


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog. level and fmt default to LOG_LEVEL / LOG_FORMAT;
    fmt "json" renders one JSON object per line, anything else the console renderer.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    fmt = (fmt or os.getenv("LOG_FORMAT") or "json").strip().lower()

    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.format_exc_info,
            _shorten_wallets,
            structlog.processors.EventRenamer("event_type"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger bound to a module name.

        logger = get_logger(__name__)
        logger.info("verification_upserted", wallet=addr, status="approved")
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet: str, name: str = "backend_bizverify") -> structlog.BoundLogger:
    """Logger with wallet bound to every subsequent call."""
    return get_logger(name).bind(wallet=wallet)
