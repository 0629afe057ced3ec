"""
Structured logging for Backend BizVerify.

JSON logs with timestamp, event_type, wallet and request context.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_bizverify.verify_logging.logger import bind_wallet, get_logger, short_wallet

__all__ = ["bind_wallet", "get_logger", "short_wallet"]
