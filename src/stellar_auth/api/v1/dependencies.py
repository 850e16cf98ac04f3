"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Request

from stellar_auth.core.errors import SessionInvalidOrExpiredError
from stellar_auth.services.login import LoginProtocol
from stellar_auth.services.nonce_store import NonceStore
from stellar_auth.services.session import SessionData, SessionManager


def get_nonce_store(request: Request) -> NonceStore:
    """Return the nonce store created at application startup."""
    store: NonceStore = request.app.state.nonce_store
    return store


def get_session_manager(request: Request) -> SessionManager:
    """Return the session manager created at application startup."""
    manager: SessionManager = request.app.state.session_manager
    return manager


NonceStoreDep = Annotated[NonceStore, Depends(get_nonce_store)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


def get_login_protocol(
    nonce_store: NonceStoreDep,
    session_manager: SessionManagerDep,
) -> LoginProtocol:
    return LoginProtocol(nonce_store, session_manager)


def get_current_session(request: Request, session_manager: SessionManagerDep) -> SessionData:
    """Resolve the caller's session from the session cookie.

    Args:
        request: Incoming request carrying the session cookie
        session_manager: Manager holding the sealing secret

    Returns:
        The verified session

    Raises:
        SessionInvalidOrExpiredError: If the cookie is absent, tampered with or expired
    """
    token = request.cookies.get(session_manager.cookie_name)
    if not token:
        raise SessionInvalidOrExpiredError("No session cookie")
    return session_manager.unseal(token)


CurrentSessionDep = Annotated[SessionData, Depends(get_current_session)]


def get_current_address(session: CurrentSessionDep) -> str:
    """Return the authenticated address for session-consumer routes."""
    return session.address


LoginProtocolDep = Annotated[LoginProtocol, Depends(get_login_protocol)]
CurrentAddressDep = Annotated[str, Depends(get_current_address)]
