"""Error taxonomy for the login protocol.

Every rejection the service can produce maps to exactly one ``ErrorKind``.
Presentation (status code, localized message) is keyed off the kind, so the
services raise these exceptions and the API layer renders them.
"""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    """Stable identifiers for every rejection the service can emit."""

    MISSING_FIELDS = "MissingFields"
    INVALID_ADDRESS_FORMAT = "InvalidAddressFormat"
    NONCE_EXPIRED_OR_MISSING = "NonceExpiredOrMissing"
    INVALID_SIGNATURE = "InvalidSignature"
    SESSION_INVALID_OR_EXPIRED = "SessionInvalidOrExpired"
    INTERNAL_FAILURE = "InternalFailure"


class AuthError(Exception):
    """Base exception raised for authentication failures.

    Subclasses pin ``kind`` and ``status_code``; the message passed to the
    constructor is for server-side logs only and is never sent to clients.
    """

    kind: ErrorKind = ErrorKind.INTERNAL_FAILURE
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.kind.value)
        self.detail = detail or self.kind.value


class MissingFieldsError(AuthError):
    """Raised when a required request field is absent or empty."""

    kind = ErrorKind.MISSING_FIELDS
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidAddressFormatError(AuthError):
    """Raised when an address is not a valid encoded Ed25519 public key."""

    kind = ErrorKind.INVALID_ADDRESS_FORMAT
    status_code = status.HTTP_400_BAD_REQUEST


class NonceExpiredOrMissingError(AuthError):
    """Raised when no live nonce matches the submitted message."""

    kind = ErrorKind.NONCE_EXPIRED_OR_MISSING
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidSignatureError(AuthError):
    """Raised when the signature does not verify or cannot be decoded."""

    kind = ErrorKind.INVALID_SIGNATURE
    status_code = status.HTTP_401_UNAUTHORIZED


class SessionInvalidOrExpiredError(AuthError):
    """Raised when a session token is tampered with, corrupt or expired."""

    kind = ErrorKind.SESSION_INVALID_OR_EXPIRED
    status_code = status.HTTP_401_UNAUTHORIZED


class InternalFailureError(AuthError):
    """Raised when verification or sealing fails unexpectedly."""

    kind = ErrorKind.INTERNAL_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
