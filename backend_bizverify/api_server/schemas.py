"""
Pydantic models describing the wire envelopes for OpenAPI docs.

The handler builds the bodies itself (so malformed JSON still gets a 400
envelope); these models document that shape.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class VerifyBusinessBody(BaseModel):
    """POST /verify-business body."""

    walletAddress: str = Field(..., min_length=10, description="Wallet address (trimmed, at least 10 chars)")
    businessName: str = Field(..., min_length=1, description="Registered business name")
    externalUserId: str = Field(..., min_length=1, description="Caller-side user identifier")


class VerificationData(BaseModel):
    """Stored verification verdict for one wallet."""

    id: int = Field(..., description="Store-assigned identity, stable across re-verifications")
    walletAddress: str
    businessName: str
    externalUserId: str
    totalTransactions: int = Field(..., ge=0)
    uniqueCounterparties: int = Field(..., ge=0)
    meetsRequirements: bool
    verificationStatus: str = Field(..., description="approved | rejected")
    failureReason: str | None = Field(None, description="Present only when rejected")
    createdAt: str | None = Field(None, description="ISO 8601, first verification")
    updatedAt: str | None = Field(None, description="ISO 8601, refreshed on every write")


class SuccessEnvelope(BaseModel):
    success: bool = True
    data: VerificationData


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str


VERIFY_RESPONSES = {
    200: {"model": SuccessEnvelope, "description": "Verification stored"},
    400: {"model": ErrorEnvelope, "description": "Invalid input or malformed JSON"},
    401: {"model": ErrorEnvelope, "description": "Missing or wrong credential"},
    500: {"model": ErrorEnvelope, "description": "Store or unexpected failure"},
}

LOOKUP_RESPONSES = {
    200: {"model": SuccessEnvelope, "description": "Stored verification"},
    401: {"model": ErrorEnvelope, "description": "Missing or wrong credential"},
    404: {"model": ErrorEnvelope, "description": "Wallet never verified"},
    500: {"model": ErrorEnvelope, "description": "Store or unexpected failure"},
}
