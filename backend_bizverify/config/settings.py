"""
Application settings and environment configuration.

Responsibilities:
- Build a typed, immutable Settings object from environment variables.
- Validate the authentication profile (token mode needs a configured token).
- Provide defaults for optional values (DB URL, API host/port, oracle latency).
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_bizverify.config.env import (
    DEFAULT_AUTH_HEADER,
    DEFAULT_DB_URL,
    env_float,
    env_int,
    env_str,
    get_database_url,
    load_bizverify_env,
)

AUTH_MODE_NONE = "none"
AUTH_MODE_TOKEN = "token"
AUTH_MODES = (AUTH_MODE_NONE, AUTH_MODE_TOKEN)

# uvicorn accepts exactly these
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")
_LOG_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


@dataclass(frozen=True)
class Settings:
    """Service configuration passed explicitly into the handler and store."""

    database_url: str = DEFAULT_DB_URL
    auth_mode: str = AUTH_MODE_NONE
    auth_token: str | None = None
    auth_header: str = DEFAULT_AUTH_HEADER
    oracle_latency_sec: float = 0.0
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"

    def __post_init__(self) -> None:
        header = (self.auth_header or "").strip().lower()
        if not header:
            raise ValueError("auth_header must be non-empty")
        object.__setattr__(self, "auth_header", header)
        level = (self.log_level or "").strip().lower()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        object.__setattr__(self, "log_level", level)
        if self.auth_mode not in AUTH_MODES:
            raise ValueError(
                f"auth_mode must be one of {', '.join(AUTH_MODES)}, got {self.auth_mode!r}"
            )
        if self.auth_mode == AUTH_MODE_TOKEN and not self.auth_token:
            raise ValueError("auth_token is required when auth_mode is 'token'")
        if self.oracle_latency_sec < 0:
            raise ValueError("oracle_latency_sec must be >= 0")

    @property
    def requires_auth(self) -> bool:
        return self.auth_mode == AUTH_MODE_TOKEN


def get_settings() -> Settings:
    """
    Return application settings read from the environment (.env honoured).

    Raises:
        ValueError: When a value is malformed or the auth profile is incomplete.
    """
    load_bizverify_env()
    return Settings(
        database_url=get_database_url(),
        auth_mode=env_str("BIZVERIFY_AUTH_MODE", AUTH_MODE_NONE).lower(),
        auth_token=env_str("BIZVERIFY_AUTH_TOKEN") or None,
        auth_header=env_str("BIZVERIFY_AUTH_HEADER", DEFAULT_AUTH_HEADER),
        oracle_latency_sec=env_float("BIZVERIFY_ORACLE_LATENCY_SEC", 0.0),
        api_host=env_str("API_HOST", "0.0.0.0"),
        api_port=env_int("API_PORT", 8000),
        log_level=env_str("LOG_LEVEL", "info"),
    )
