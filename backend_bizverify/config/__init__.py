"""
Configuration management for Backend BizVerify.

Loads and validates settings from environment variables and an optional .env
file. The API app factory is the only caller of get_settings(); everything
below it receives a Settings instance explicitly.
"""

from backend_bizverify.config.settings import (  # noqa: F401
    AUTH_MODE_NONE,
    AUTH_MODE_TOKEN,
    Settings,
    get_settings,
)

__all__ = ["AUTH_MODE_NONE", "AUTH_MODE_TOKEN", "Settings", "get_settings"]
