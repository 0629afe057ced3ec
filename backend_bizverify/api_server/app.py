"""
ASGI application entrypoint.

Builds the app from environment settings.
Run with: uvicorn backend_bizverify.api_server.app:app --host 0.0.0.0 --port 8000
"""

from backend_bizverify.api_server.server import create_app

app = create_app()

__all__ = ["app"]
