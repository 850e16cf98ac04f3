"""Challenge-response login flow tying nonces, signatures and sessions together."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stellar_auth.core.errors import (
    AuthError,
    InternalFailureError,
    InvalidAddressFormatError,
    InvalidSignatureError,
    MissingFieldsError,
    NonceExpiredOrMissingError,
)
from stellar_auth.services.crypto import SignatureVerifier
from stellar_auth.services.nonce_store import NonceRecord, NonceStore
from stellar_auth.services.session import SessionManager

logger = logging.getLogger(__name__)

DISPLAY_TOKEN_PREFIX = "mock-jwt-"
MAX_LOGGED_ADDRESS_CHARS = 64


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful verification phase."""

    address: str
    session_token: str
    cookie_directive: str
    display_token: str


def _loggable(address: object) -> str | None:
    """Clip caller-supplied addresses before they reach log records."""
    if address is None:
        return None
    return str(address)[:MAX_LOGGED_ADDRESS_CHARS]


def display_token(address: str) -> str:
    """Informational token kept in login responses for older clients.

    It is derived from the public address alone and is never accepted as a
    credential anywhere.
    """
    return f"{DISPLAY_TOKEN_PREFIX}{address[:10]}"


class LoginProtocol:
    """Run the challenge and verification phases of a wallet login."""

    def __init__(
        self,
        nonce_store: NonceStore,
        session_manager: SessionManager,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        self.nonce_store = nonce_store
        self.session_manager = session_manager
        self.verifier = verifier or SignatureVerifier()

    def _require_address(self, address: str | None) -> str:
        if not address:
            raise MissingFieldsError("Address is required")
        if not self.verifier.is_valid_address(address):
            raise InvalidAddressFormatError(f"Rejected address {_loggable(address)!r}")
        return address

    def issue_challenge(self, address: str | None) -> NonceRecord:
        """Challenge phase: issue a fresh nonce for ``address``."""
        address = self._require_address(address)
        record = self.nonce_store.issue_record(address)
        logger.info("Issued login challenge for %s", address)
        return record

    def verify(
        self,
        address: str | None,
        message: str | None,
        signature: str | None,
    ) -> LoginResult:
        """Verification phase: check the signed nonce and open a session.

        Gates run in a fixed order (fields, address format, nonce match,
        signature) and the nonce is consumed only after all of them pass.

        Raises:
            AuthError: A subclass identifying the rejected gate
        """
        try:
            return self._verify(address, message, signature)
        except AuthError as err:
            log = logger.error if isinstance(err, InternalFailureError) else logger.warning
            log("Login rejected (%s) for %s: %s", err.kind.value, _loggable(address), err.detail)
            raise

    def _verify(
        self,
        address: str | None,
        message: str | None,
        signature: str | None,
    ) -> LoginResult:
        if not address or not message or not signature:
            raise MissingFieldsError("Missing one of address, message, signature")
        address = self._require_address(address)

        stored = self.nonce_store.peek(address)
        if stored is None or stored != message:
            raise NonceExpiredOrMissingError("No live nonce matches the submitted message")

        try:
            valid = self.verifier.verify(address, message, signature)
        except InvalidAddressFormatError:
            raise
        except Exception as err:
            logger.exception("Signature verification crashed for %s", address)
            raise InternalFailureError("Signature verification failed unexpectedly") from err
        if not valid:
            raise InvalidSignatureError("Signature does not match address and nonce")

        if not self.nonce_store.consume_matching(address, message):
            # Lost a race with a concurrent submission of the same nonce.
            raise NonceExpiredOrMissingError("Nonce was consumed before this attempt finished")

        try:
            token = self.session_manager.create(address)
            cookie = self.session_manager.to_cookie_directive(token)
        except Exception as err:
            logger.exception("Session sealing crashed for %s", address)
            raise InternalFailureError("Could not seal session") from err

        logger.info("Authenticated %s", address)
        return LoginResult(
            address=address,
            session_token=token,
            cookie_directive=cookie,
            display_token=display_token(address),
        )
