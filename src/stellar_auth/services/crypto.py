"""Ed25519 signature verification for Stellar account addresses."""

from __future__ import annotations

import base64
import binascii
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from stellar_sdk import StrKey

from stellar_auth.core.errors import InvalidAddressFormatError

logger = logging.getLogger(__name__)

PUBKEY_LENGTH_BYTES = 32
SIGNATURE_LENGTH_BYTES = 64


class SignatureVerifier:
    """Verify that a message was signed by the key behind a Stellar address."""

    @staticmethod
    def is_valid_address(address: str) -> bool:
        """Return True if ``address`` is a well-formed ``G...`` account key."""
        return isinstance(address, str) and StrKey.is_valid_ed25519_public_key(address)

    @staticmethod
    def decode_address(address: str) -> bytes:
        """Decode a StrKey-encoded account address into raw key bytes.

        Raises:
            InvalidAddressFormatError: If ``address`` is not a valid encoded key
        """
        if not isinstance(address, str):
            raise InvalidAddressFormatError("Address must be a string")
        try:
            pubkey_bytes = StrKey.decode_ed25519_public_key(address)
        except ValueError as err:
            raise InvalidAddressFormatError("Invalid public key format") from err
        if len(pubkey_bytes) != PUBKEY_LENGTH_BYTES:
            raise InvalidAddressFormatError("Ed25519 public keys must be 32 bytes")
        return pubkey_bytes

    @staticmethod
    def decode_signature(signature_b64: str) -> bytes:
        """Decode a base64 signature, accepting URL-safe and unpadded forms.

        Only canonical encodings are accepted: re-encoding the decoded bytes
        must give back the (normalized) input.

        Raises:
            ValueError: If the signature is not canonical base64 of 64 bytes
        """
        normalized = signature_b64.strip().replace("-", "+").replace("_", "/")
        normalized += "=" * (-len(normalized) % 4)
        try:
            raw = base64.b64decode(normalized, validate=True)
        except (binascii.Error, ValueError) as err:
            raise ValueError(f"Invalid base64 encoding: {err}") from err
        if base64.b64encode(raw).decode("ascii") != normalized:
            raise ValueError("Non-canonical base64 encoding")
        if len(raw) != SIGNATURE_LENGTH_BYTES:
            raise ValueError("Ed25519 signatures must be 64 bytes")
        return raw

    @staticmethod
    def verify_signature_bytes(pubkey_bytes: bytes, message: bytes, signature: bytes) -> bool:
        """Verify an Ed25519 signature over raw bytes."""
        try:
            pubkey = Ed25519PublicKey.from_public_bytes(pubkey_bytes)
            pubkey.verify(signature, message)
            return True
        except (InvalidSignature, ValueError):
            return False

    def verify(self, address: str, message: str | bytes, signature_b64: str) -> bool:
        """Verify a base64 signature over ``message`` under ``address``.

        Args:
            address: StrKey-encoded Ed25519 public key (``G...``)
            message: Exact text (encoded as UTF-8) or bytes that were signed
            signature_b64: Base64-encoded 64-byte signature

        Returns:
            True only if the signature is valid; False on mismatch or decode failure

        Raises:
            InvalidAddressFormatError: If ``address`` is malformed
        """
        pubkey_bytes = self.decode_address(address)
        message_bytes = message.encode("utf-8") if isinstance(message, str) else message
        try:
            signature = self.decode_signature(signature_b64)
        except ValueError as err:
            logger.debug("Rejecting undecodable signature for %s: %s", address, err)
            return False
        return self.verify_signature_bytes(pubkey_bytes, message_bytes, signature)
