"""
API server package — HTTP interface for business wallet verification.

VerificationHandler holds the request pipeline and error envelope logic;
server.create_app() wraps it in FastAPI routes with request logging.
"""

from backend_bizverify.api_server.handler import HandlerResponse, VerificationHandler
from backend_bizverify.api_server.server import create_app

__all__ = ["HandlerResponse", "VerificationHandler", "create_app"]
