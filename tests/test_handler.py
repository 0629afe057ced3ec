"""
Pytest tests for VerificationHandler: sequencing, auth gate, error envelopes.

The store and metrics provider are replaced with spies where ordering matters.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from backend_bizverify.api_server.handler import VerificationHandler
from backend_bizverify.core.exceptions import StoreError
from backend_bizverify.verification import ActivityMetrics, MetricsProvider, MockPiNetworkOracle

from tests.conftest import ACME_WALLET, TEST_TOKEN


def _body(**overrides) -> bytes:
    payload = {
        "walletAddress": ACME_WALLET,
        "businessName": "Acme Corporation",
        "externalUserId": "demo_user_1",
    }
    payload.update(overrides)
    return json.dumps(payload).encode("utf-8")


class FixedMetrics(MetricsProvider):
    def __init__(self, total: int, unique: int) -> None:
        self.metrics = ActivityMetrics(total, unique)
        self.calls = 0

    def fetch_metrics(self, wallet_address: str) -> ActivityMetrics:
        self.calls += 1
        return self.metrics


@pytest.fixture
def spy_store():
    return MagicMock()


def test_handle_success_persists_and_returns_record(open_settings, store):
    handler = VerificationHandler(open_settings, store, MockPiNetworkOracle())
    resp = handler.handle("POST", {}, _body())
    assert resp.status_code == 200
    assert resp.body["success"] is True
    data = resp.body["data"]
    assert data["walletAddress"] == ACME_WALLET
    assert data["totalTransactions"] == 145
    assert data["uniqueCounterparties"] == 55
    assert data["meetsRequirements"] is True
    assert data["verificationStatus"] == "approved"
    assert "failureReason" not in data
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert store.get(ACME_WALLET).id == data["id"]


def test_handle_rejected_verdict_is_still_success_envelope(open_settings, store):
    handler = VerificationHandler(open_settings, store, FixedMetrics(40, 5))
    resp = handler.handle("POST", {}, _body())
    assert resp.status_code == 200
    data = resp.body["data"]
    assert data["meetsRequirements"] is False
    assert data["verificationStatus"] == "rejected"
    assert "transactions" in data["failureReason"]
    assert "unique wallets" in data["failureReason"]


def test_handle_options_preflight(open_settings, spy_store):
    handler = VerificationHandler(open_settings, spy_store, MockPiNetworkOracle())
    resp = handler.handle("OPTIONS", {}, None)
    assert resp.status_code == 204
    assert resp.body is None
    assert "content-type" in resp.headers["Access-Control-Allow-Headers"]
    spy_store.upsert.assert_not_called()


def test_handle_invalid_wallet_never_reaches_oracle_or_store(open_settings, spy_store):
    metrics = FixedMetrics(200, 50)
    handler = VerificationHandler(open_settings, spy_store, metrics)
    resp = handler.handle("POST", {}, _body(walletAddress="short", businessName=""))
    assert resp.status_code == 400
    assert resp.body == {
        "success": False,
        "error": "Invalid wallet address format. Please provide a valid Pi Network wallet address.",
    }
    assert metrics.calls == 0
    spy_store.upsert.assert_not_called()


def test_handle_malformed_json_is_bad_request(open_settings, spy_store):
    handler = VerificationHandler(open_settings, spy_store, MockPiNetworkOracle())
    resp = handler.handle("POST", {}, b"{walletAddress:")
    assert resp.status_code == 400
    assert resp.body["success"] is False
    assert "Malformed JSON" in resp.body["error"]


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"x-verification-token": "wrong"},
        {"Authorization": "Bearer wrong"},
        {"Authorization": TEST_TOKEN},
    ],
)
def test_token_mode_rejects_before_validation(token_settings, spy_store, headers):
    metrics = FixedMetrics(200, 50)
    handler = VerificationHandler(token_settings, spy_store, metrics)
    # body is invalid too: auth must win
    resp = handler.handle("POST", headers, b"not json")
    assert resp.status_code == 401
    assert resp.body == {"success": False, "error": "Unauthorized"}
    assert metrics.calls == 0
    spy_store.upsert.assert_not_called()


@pytest.mark.parametrize(
    "headers",
    [
        {"x-verification-token": TEST_TOKEN},
        {"X-Verification-Token": TEST_TOKEN},
        {"Authorization": f"Bearer {TEST_TOKEN}"},
    ],
)
def test_token_mode_accepts_matching_credential(token_settings, store, headers):
    handler = VerificationHandler(token_settings, store, MockPiNetworkOracle())
    resp = handler.handle("POST", headers, _body())
    assert resp.status_code == 200
    assert resp.body["success"] is True


def test_store_failure_is_generic_internal_error(token_settings, spy_store):
    spy_store.upsert.side_effect = StoreError()
    handler = VerificationHandler(token_settings, spy_store, MockPiNetworkOracle())
    resp = handler.handle("POST", {"x-verification-token": TEST_TOKEN}, _body())
    assert resp.status_code == 500
    assert resp.body == {
        "success": False,
        "error": "Verification could not be saved. Please try again.",
    }


def test_unexpected_failure_does_not_leak_detail(open_settings, spy_store):
    class Exploding(MetricsProvider):
        def fetch_metrics(self, wallet_address):
            raise RuntimeError("driver socket 10.0.0.5 refused")

    handler = VerificationHandler(open_settings, spy_store, Exploding())
    resp = handler.handle("POST", {}, _body())
    assert resp.status_code == 500
    assert resp.body == {"success": False, "error": "An unexpected error occurred"}
    assert "10.0.0.5" not in json.dumps(resp.body)


def test_same_wallet_twice_keeps_one_record(open_settings, store):
    handler = VerificationHandler(open_settings, store, MockPiNetworkOracle())
    first = handler.handle("POST", {}, _body(businessName="Acme Corporation")).body["data"]
    second = handler.handle("POST", {}, _body(businessName="Acme Holdings")).body["data"]
    assert first["id"] == second["id"]
    assert second["businessName"] == "Acme Holdings"
    assert store.get(ACME_WALLET).business_name == "Acme Holdings"


def test_lookup_found_and_missing(open_settings, store):
    handler = VerificationHandler(open_settings, store, MockPiNetworkOracle())
    missing = handler.lookup({}, ACME_WALLET)
    assert missing.status_code == 404
    assert missing.body["success"] is False
    handler.handle("POST", {}, _body())
    found = handler.lookup({}, ACME_WALLET)
    assert found.status_code == 200
    assert found.body["data"]["walletAddress"] == ACME_WALLET


def test_lookup_requires_token_in_token_mode(token_settings, spy_store):
    handler = VerificationHandler(token_settings, spy_store, MockPiNetworkOracle())
    resp = handler.lookup({}, ACME_WALLET)
    assert resp.status_code == 401
    spy_store.get.assert_not_called()


def test_token_mode_mixed_case_configured_header(db_url, store):
    from backend_bizverify.config import AUTH_MODE_TOKEN, Settings

    settings = Settings(
        database_url=db_url,
        auth_mode=AUTH_MODE_TOKEN,
        auth_token=TEST_TOKEN,
        auth_header="X-Api-Key",
    )
    handler = VerificationHandler(settings, store, MockPiNetworkOracle())
    resp = handler.handle("POST", {"X-Api-Key": TEST_TOKEN}, _body())
    assert resp.status_code == 200
    assert resp.body["success"] is True
    assert "x-api-key" in resp.headers["Access-Control-Allow-Headers"]
