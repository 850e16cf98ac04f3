"""Sealed session tokens bound to an authenticated Stellar address."""

from __future__ import annotations

import base64
import binascii
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from http.cookies import SimpleCookie
from typing import Any

from jose import JWTError, jwt

from stellar_auth.core.errors import SessionInvalidOrExpiredError

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"
DEFAULT_SESSION_TTL_SECONDS = 60 * 60 * 24 * 7
DEFAULT_COOKIE_NAME = "stellar_session"

# Time claims are checked against the injected clock in ``unseal``.
_DECODE_OPTIONS: dict[str, Any] = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
}


@dataclass(frozen=True)
class SessionData:
    """Verified contents of a session token."""

    address: str
    issued_at: int
    expires_at: int


class SessionManager:
    """Mint and verify HMAC-sealed session tokens.

    Tokens are compact JWS strings signed with the process-wide session
    secret. Rotating the secret invalidates every outstanding session.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        algorithm: str = "HS256",
        cookie_name: str = DEFAULT_COOKIE_NAME,
        secure_cookies: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Session secret must be provided")
        if ttl_seconds <= 0:
            raise ValueError("Session TTL must be positive")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._algorithm = algorithm
        self._clock = clock
        self.cookie_name = cookie_name
        self.secure_cookies = secure_cookies

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def create(self, address: str) -> str:
        """Seal a new session for ``address`` and return the token."""
        issued_at = int(self._clock())
        claims: dict[str, Any] = {
            "sub": address,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + self._ttl_seconds,
            "typ": SESSION_TOKEN_TYPE,
        }
        token: str = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return token

    def unseal(self, token: str) -> SessionData:
        """Verify ``token`` and return the session it carries.

        Raises:
            SessionInvalidOrExpiredError: If the token is tampered with,
                malformed, or outside its validity window
        """
        if not token or not isinstance(token, str):
            raise SessionInvalidOrExpiredError("Missing session token")
        _ensure_canonical_signature(token)
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options=_DECODE_OPTIONS,
            )
        except JWTError as err:
            raise SessionInvalidOrExpiredError(f"Could not validate session: {err}") from err

        address = claims.get("sub")
        issued_at = claims.get("iat")
        expires_at = claims.get("exp")
        if claims.get("typ") != SESSION_TOKEN_TYPE or not isinstance(address, str) or not address:
            raise SessionInvalidOrExpiredError("Session claims are incomplete")
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise SessionInvalidOrExpiredError("Session time claims are malformed")

        now = self._clock()
        if not issued_at <= now < expires_at:
            raise SessionInvalidOrExpiredError("Session is outside its validity window")
        return SessionData(address=address, issued_at=issued_at, expires_at=expires_at)

    def to_cookie_directive(self, token: str) -> str:
        """Render ``token`` as a Set-Cookie header value."""
        return self._render_cookie(token, max_age=self._ttl_seconds)

    def clear_cookie_directive(self) -> str:
        """Render a Set-Cookie value instructing the client to drop the session."""
        return self._render_cookie("", max_age=0)

    def _render_cookie(self, value: str, *, max_age: int) -> str:
        cookie: SimpleCookie = SimpleCookie()
        cookie[self.cookie_name] = value
        morsel = cookie[self.cookie_name]
        morsel["httponly"] = True
        morsel["path"] = "/"
        morsel["samesite"] = "Lax"
        morsel["max-age"] = max_age
        if self.secure_cookies:
            morsel["secure"] = True
        return morsel.OutputString()


def _ensure_canonical_signature(token: str) -> None:
    """Reject tokens whose signature segment carries non-canonical padding bits."""
    parts = token.split(".")
    if len(parts) != 3:
        raise SessionInvalidOrExpiredError("Malformed session token")
    segment = parts[2]
    try:
        raw = base64.b64decode(segment + "=" * (-len(segment) % 4), altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as err:
        raise SessionInvalidOrExpiredError("Malformed session signature") from err
    if base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=") != segment:
        raise SessionInvalidOrExpiredError("Malformed session signature")
