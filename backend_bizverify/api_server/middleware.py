"""
HTTP middleware — request logging and correlation IDs.

Binds a request_id into structlog contextvars for the duration of each
request so every log line emitted by the handler and store carries it, then
logs method, path, status and duration once the response is ready.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request

from backend_bizverify.verify_logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "http_request_failed",
                method=request.method,
                path=request.url.path,
            )
            raise
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        structlog.contextvars.clear_contextvars()
        return response
