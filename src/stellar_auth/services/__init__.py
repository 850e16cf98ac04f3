"""Business logic services for the Stellar auth service."""

from .crypto import SignatureVerifier
from .login import LoginProtocol, LoginResult
from .nonce_store import NonceRecord, NonceStore
from .session import SessionData, SessionManager

__all__ = [
    "LoginProtocol",
    "LoginResult",
    "NonceRecord",
    "NonceStore",
    "SessionData",
    "SessionManager",
    "SignatureVerifier",
]
