"""
Environment variable loading for BizVerify.

- BIZVERIFY_DB_URL / DATABASE_URL: SQLAlchemy URL (default: sqlite:///bizverify.db)
- BIZVERIFY_AUTH_MODE: none | token (default: none)
- BIZVERIFY_AUTH_TOKEN: expected credential when auth mode is token
- BIZVERIFY_AUTH_HEADER: header carrying the credential (default: x-verification-token)
- BIZVERIFY_ORACLE_LATENCY_SEC: simulated oracle delay in seconds (default: 0)
- API_HOST / API_PORT / LOG_LEVEL
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_bizverify/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_DB_URL = "sqlite:///bizverify.db"
DEFAULT_AUTH_HEADER = "x-verification-token"


def load_bizverify_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str = "") -> str:
    """Return a stripped env value, or default when unset or blank."""
    return (os.getenv(name) or "").strip() or default


def env_float(name: str, default: float) -> float:
    raw = env_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def env_int(name: str, default: int) -> int:
    raw = env_str(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def get_database_url() -> str:
    """
    Resolve the SQLAlchemy database URL.
    Order: BIZVERIFY_DB_URL > DATABASE_URL > DATABASE_PATH (SQLite file) > default.
    """
    load_bizverify_env()
    url = env_str("BIZVERIFY_DB_URL") or env_str("DATABASE_URL")
    if url:
        return url
    path = env_str("DATABASE_PATH")
    if path:
        return f"sqlite:///{path}"
    return DEFAULT_DB_URL
