"""
Pytest fixtures for BizVerify tests. Uses a temporary SQLite DB per test and a
controllable clock so updated_at changes are observable.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

ACME_WALLET = "GBRPYHIL2CI3FNQ4BXLFMNDLFJUNPU2HY3ZMFSHONUCEOASW7QC7OX2H"
# char-code sum 500 -> 50 transactions, 60 unique wallets (rejected)
LOW_ACTIVITY_WALLET = "2222222222"
TEST_TOKEN = "s3cret-verification-token"


class FakeClock:
    """Returns a fixed start time, advancing one minute per call."""

    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'bizverify.db'}"


@pytest.fixture
def store(db_url, clock):
    """Fresh VerificationStore on a temp SQLite file, schema created."""
    from backend_bizverify.database.store import VerificationStore, create_store_engine

    engine = create_store_engine(db_url)
    s = VerificationStore(engine, clock=clock)
    s.ensure_schema()
    yield s
    engine.dispose()


@pytest.fixture
def open_settings(db_url):
    from backend_bizverify.config import AUTH_MODE_NONE, Settings

    return Settings(database_url=db_url, auth_mode=AUTH_MODE_NONE)


@pytest.fixture
def token_settings(db_url):
    from backend_bizverify.config import AUTH_MODE_TOKEN, Settings

    return Settings(database_url=db_url, auth_mode=AUTH_MODE_TOKEN, auth_token=TEST_TOKEN)


@pytest.fixture
def client(open_settings, store):
    """FastAPI TestClient for the unauthenticated profile."""
    from fastapi.testclient import TestClient

    from backend_bizverify.api_server.server import create_app

    return TestClient(create_app(open_settings, store=store))


@pytest.fixture
def token_client(token_settings, store):
    """FastAPI TestClient for the token-authenticated profile."""
    from fastapi.testclient import TestClient

    from backend_bizverify.api_server.server import create_app

    return TestClient(create_app(token_settings, store=store))
