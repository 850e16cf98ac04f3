# tests/conftest.py
from __future__ import annotations

import base64
import os
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from stellar_sdk import StrKey

os.environ.setdefault("SESSION_SECRET", "test-session-secret-with-at-least-32-chars")

from stellar_auth.core.settings import Settings
from stellar_auth.main import create_app
from stellar_auth.services.login import LoginProtocol
from stellar_auth.services.nonce_store import NonceStore
from stellar_auth.services.session import SessionManager

TEST_SECRET = "unit-test-secret-0123456789abcdefghijkl"
START_TIME = 1_700_000_000.0


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def sign_b64(signing_key: SigningKey, message: str) -> str:
    signature = signing_key.sign(message.encode("utf-8")).signature
    return base64.b64encode(signature).decode("ascii")


def generate_identity() -> dict[str, Any]:
    signing_key = SigningKey.generate()
    pubkey_bytes = bytes(signing_key.verify_key)
    return {
        "signing_key": signing_key,
        "pubkey_bytes": pubkey_bytes,
        "address": StrKey.encode_ed25519_public_key(pubkey_bytes),
    }


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sign() -> Any:
    """Return a helper producing base64 Ed25519 signatures over UTF-8 text."""
    return sign_b64


@pytest.fixture()
def identity() -> dict[str, Any]:
    """Return a fresh Stellar keypair for the primary test account."""
    return generate_identity()


@pytest.fixture()
def other_identity() -> dict[str, Any]:
    """Return a fresh Stellar keypair for a second account."""
    return generate_identity()


@pytest.fixture()
def nonce_store(clock: FakeClock) -> NonceStore:
    return NonceStore(ttl_seconds=300, clock=clock)


@pytest.fixture()
def session_manager(clock: FakeClock) -> SessionManager:
    return SessionManager(TEST_SECRET, ttl_seconds=3600, secure_cookies=False, clock=clock)


@pytest.fixture()
def login_protocol(nonce_store: NonceStore, session_manager: SessionManager) -> LoginProtocol:
    return LoginProtocol(nonce_store, session_manager)


@pytest.fixture()
def test_settings() -> Settings:
    """Provide isolated settings for a per-test application."""
    return Settings(
        session_secret=TEST_SECRET,
        app_env="development",
        nonce_ttl_seconds=300,
        session_ttl_seconds=3600,
    )


@pytest.fixture()
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
