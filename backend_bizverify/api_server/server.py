"""
FastAPI server — thin routing shell over VerificationHandler.

POST /verify-business runs a verification and stores the verdict.
OPTIONS /verify-business answers CORS preflight with 204.
GET /verifications/{wallet} returns the stored verdict for a wallet.
GET /health is a liveness probe.

Config comes in as an explicit Settings; only create_app() falls back to the
environment when none is given.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from backend_bizverify import __version__
from backend_bizverify.api_server.handler import HandlerResponse, VerificationHandler
from backend_bizverify.api_server.middleware import install_request_logging
from backend_bizverify.api_server.schemas import (
    LOOKUP_RESPONSES,
    VERIFY_RESPONSES,
    VerifyBusinessBody,
)
from backend_bizverify.config.settings import Settings, get_settings
from backend_bizverify.database.store import VerificationStore, get_store
from backend_bizverify.verification.oracle import MetricsProvider, MockPiNetworkOracle
from backend_bizverify.verify_logging import get_logger

logger = get_logger(__name__)


def to_http_response(result: HandlerResponse) -> Response:
    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(
        status_code=result.status_code,
        content=result.body,
        headers=result.headers,
    )


def create_app(
    settings: Settings | None = None,
    *,
    store: VerificationStore | None = None,
    metrics_provider: MetricsProvider | None = None,
) -> FastAPI:
    """
    Build the ASGI app. Defaults: settings from env, store from
    settings.database_url, MockPiNetworkOracle as metrics provider.
    """
    settings = settings or get_settings()
    store = store or get_store(settings.database_url)
    metrics_provider = metrics_provider or MockPiNetworkOracle(
        simulated_latency_sec=settings.oracle_latency_sec
    )
    handler = VerificationHandler(settings, store, metrics_provider)

    app = FastAPI(
        title="Backend BizVerify API",
        description="Verify business wallet activity and store one verdict per wallet.",
        version=__version__,
    )
    install_request_logging(app)

    @app.post(
        "/verify-business",
        responses=VERIFY_RESPONSES,
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": VerifyBusinessBody.model_json_schema()}},
            }
        },
    )
    async def verify_business(request: Request) -> Response:
        """Run a verification. Body: walletAddress, businessName, externalUserId."""
        body = await request.body()
        result = await run_in_threadpool(handler.handle, "POST", dict(request.headers), body)
        return to_http_response(result)

    @app.options("/verify-business")
    def verify_business_preflight() -> Response:
        return to_http_response(handler.handle("OPTIONS", {}, None))

    @app.get("/verifications/{wallet}", responses=LOOKUP_RESPONSES)
    def get_verification(wallet: str, request: Request) -> Response:
        """Return the latest stored verdict for a wallet; 404 if never verified."""
        return to_http_response(handler.lookup(dict(request.headers), wallet))

    @app.options("/verifications/{wallet}")
    def get_verification_preflight(wallet: str) -> Response:
        return to_http_response(handler.handle("OPTIONS", {}, None))

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe: API is up."""
        return {"status": "ok", "auth_mode": settings.auth_mode}

    logger.info("api_app_created", auth_mode=settings.auth_mode, version=__version__)
    return app
