"""Authentication request/response schemas."""

from pydantic import BaseModel, Field


class NonceRequest(BaseModel):
    """Request to obtain a login challenge for an account."""

    address: str | None = Field(None, description="Stellar account public key (G...)")


class NonceResponse(BaseModel):
    """Challenge issued to the client; ``nonce`` is the exact text to sign."""

    address: str = Field(..., description="Account the nonce was issued for")
    nonce: str = Field(..., description="One-time challenge to sign as UTF-8 text")
    expires_at: int = Field(..., description="Unix timestamp after which the nonce is void")


class LoginRequest(BaseModel):
    """Signed challenge submitted during the verification phase.

    Fields are optional at the schema level so that absent values are
    reported as a single ``MissingFields`` rejection.
    """

    address: str | None = Field(None, description="Stellar account public key (G...)")
    message: str | None = Field(None, description="The nonce that was signed")
    signature: str | None = Field(None, description="Base64-encoded Ed25519 signature")


class LoginResponse(BaseModel):
    """Response returned after a successful login."""

    success: bool = Field(True, description="Always true on success")
    address: str = Field(..., description="Authenticated account")
    token: str = Field(
        ...,
        description="Informational display string; the session cookie is the credential",
    )


class SessionResponse(BaseModel):
    """Details of the caller's current session."""

    address: str = Field(..., description="Authenticated account")
    expires_at: int = Field(..., description="Unix timestamp when the session ends")


class LogoutResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable, localized message")
