# tests/test_session.py
"""Tests for sealed session tokens and cookie rendering."""

import pytest
from jose import jwt

from stellar_auth.core.errors import SessionInvalidOrExpiredError
from stellar_auth.services.session import SessionManager

SECRET = "session-tests-secret-0123456789abcdefgh"


@pytest.fixture()
def manager(clock) -> SessionManager:
    return SessionManager(SECRET, ttl_seconds=3600, secure_cookies=False, clock=clock)


class TestSealAndUnseal:
    """Round-trip and integrity behaviour of session tokens."""

    def test_round_trip_returns_address(self, manager, identity, clock):
        token = manager.create(identity["address"])
        session = manager.unseal(token)
        assert session.address == identity["address"]
        assert session.issued_at == int(clock.now)
        assert session.expires_at == int(clock.now) + 3600

    def test_every_single_character_change_is_detected(self, manager, identity):
        token = manager.create(identity["address"])
        for index, char in enumerate(token):
            replacement = "A" if char != "A" else "B"
            tampered = token[:index] + replacement + token[index + 1:]
            with pytest.raises(SessionInvalidOrExpiredError):
                manager.unseal(tampered)

    def test_address_substitution_breaks_seal(self, manager, identity, other_identity):
        token = manager.create(identity["address"])
        other_token = manager.create(other_identity["address"])
        header, _, signature = token.split(".")
        forged = ".".join([header, other_token.split(".")[1], signature])
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(forged)

    def test_wrong_secret_is_rejected(self, manager, identity, clock):
        rotated = SessionManager("another-secret-0123456789abcdefghijklmn", clock=clock)
        token = manager.create(identity["address"])
        with pytest.raises(SessionInvalidOrExpiredError):
            rotated.unseal(token)

    def test_wrong_algorithm_is_rejected(self, manager, identity, clock):
        now = int(clock.now)
        token = jwt.encode(
            {"sub": identity["address"], "iat": now, "nbf": now, "exp": now + 60, "typ": "session"},
            SECRET,
            algorithm="HS512",
        )
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(token)

    def test_token_without_session_type_is_rejected(self, manager, identity, clock):
        now = int(clock.now)
        token = jwt.encode(
            {"sub": identity["address"], "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b", "a.b.c", "a.b.c.d"])
    def test_malformed_tokens_are_rejected(self, manager, token):
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(token)


class TestSessionExpiry:
    """Validity window checks."""

    def test_valid_until_just_before_expiry(self, manager, identity, clock):
        token = manager.create(identity["address"])
        clock.advance(3599)
        assert manager.unseal(token).address == identity["address"]

    def test_invalid_at_expiry(self, manager, identity, clock):
        token = manager.create(identity["address"])
        clock.advance(3600)
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(token)

    def test_invalid_before_issue_time(self, manager, identity, clock):
        token = manager.create(identity["address"])
        clock.advance(-10)
        with pytest.raises(SessionInvalidOrExpiredError):
            manager.unseal(token)


class TestCookieDirective:
    """Rendering of Set-Cookie values."""

    def test_directive_attributes(self, manager, identity):
        token = manager.create(identity["address"])
        directive = manager.to_cookie_directive(token)
        assert directive.startswith(f"stellar_session={token}")
        assert "HttpOnly" in directive
        assert "Path=/" in directive
        assert "SameSite=Lax" in directive
        assert "Max-Age=3600" in directive
        assert "Secure" not in directive

    def test_secure_attribute_in_production(self, identity, clock):
        manager = SessionManager(SECRET, secure_cookies=True, cookie_name="sid", clock=clock)
        directive = manager.to_cookie_directive(manager.create(identity["address"]))
        assert directive.startswith("sid=")
        assert "Secure" in directive

    def test_clear_directive_expires_cookie(self, manager):
        directive = manager.clear_cookie_directive()
        assert directive.startswith('stellar_session=""') or directive.startswith("stellar_session=;")
        assert "Max-Age=0" in directive


def test_manager_requires_secret():
    with pytest.raises(ValueError):
        SessionManager("")
