"""
Main entrypoint: FastAPI verification server.

Env: BIZVERIFY_DB_URL (or DATABASE_URL / DATABASE_PATH), BIZVERIFY_AUTH_MODE,
BIZVERIFY_AUTH_TOKEN, BIZVERIFY_AUTH_HEADER, BIZVERIFY_ORACLE_LATENCY_SEC,
API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn backend_bizverify.api_server.app:app --host 0.0.0.0 --port 8000
"""

import sys

# Configure structured JSON logging before other imports that may log
from backend_bizverify.verify_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Load settings, build the app, and serve it with uvicorn."""
    from backend_bizverify.config import get_settings

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", message=str(e))
        sys.exit(1)

    from backend_bizverify.api_server.server import create_app
    import uvicorn

    app = create_app(settings)
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        auth_mode=settings.auth_mode,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
