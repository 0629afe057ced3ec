"""
Request validation — rejects malformed input before any computation or I/O.

Rules are checked in a fixed order and the first violation wins, so a request
with both a bad wallet and a blank business name reports the wallet.
"""

from __future__ import annotations

import json
from typing import Any

from backend_bizverify.core.exceptions import ValidationError
from backend_bizverify.verification.models import VerificationRequest

MIN_WALLET_LENGTH = 10

MSG_INVALID_WALLET = (
    "Invalid wallet address format. Please provide a valid Pi Network wallet address."
)
MSG_BUSINESS_NAME_REQUIRED = "Business name required"
MSG_EXTERNAL_USER_ID_REQUIRED = "External user id required"
MSG_MALFORMED_BODY = "Malformed JSON body"


def _trimmed(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def validate_request(
    wallet_address: Any,
    business_name: Any,
    external_user_id: Any,
) -> VerificationRequest:
    """
    Validate and trim the three request fields.

    Raises:
        ValidationError: citing the first violated rule (wallet, business name,
            external user id).
    """
    wallet = _trimmed(wallet_address)
    if len(wallet) < MIN_WALLET_LENGTH:
        raise ValidationError(MSG_INVALID_WALLET)
    business = _trimmed(business_name)
    if not business:
        raise ValidationError(MSG_BUSINESS_NAME_REQUIRED)
    external_id = _trimmed(external_user_id)
    if not external_id:
        raise ValidationError(MSG_EXTERNAL_USER_ID_REQUIRED)
    return VerificationRequest(
        wallet_address=wallet,
        business_name=business,
        external_user_id=external_id,
    )


def parse_request_body(body: bytes | str | None) -> dict[str, Any]:
    """Decode a JSON object body. Anything else is a ValidationError."""
    if body is None or (isinstance(body, (bytes, str)) and not body.strip()):
        raise ValidationError(MSG_MALFORMED_BODY)
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError(MSG_MALFORMED_BODY) from e
    if not isinstance(payload, dict):
        raise ValidationError(MSG_MALFORMED_BODY)
    return payload


def validate_payload(payload: dict[str, Any]) -> VerificationRequest:
    return validate_request(
        payload.get("walletAddress"),
        payload.get("businessName"),
        payload.get("externalUserId"),
    )
