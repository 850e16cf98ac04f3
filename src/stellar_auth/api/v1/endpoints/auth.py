"""Authentication endpoints for the Stellar auth API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from stellar_auth.api.v1.dependencies import (
    CurrentSessionDep,
    LoginProtocolDep,
    SessionManagerDep,
)
from stellar_auth.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    NonceRequest,
    NonceResponse,
    SessionResponse,
)

router = APIRouter(prefix="/auth", tags=["authentication"])

_CLIENT_ERRORS: dict[int | str, dict[str, object]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/nonce",
    summary="Issue a one-time login challenge",
    response_model=NonceResponse,
    responses=_CLIENT_ERRORS,
)
async def issue_nonce(
    payload: NonceRequest,
    login: LoginProtocolDep,
) -> NonceResponse:
    """Provide clients with a nonce to sign with their account key."""
    record = login.issue_challenge(payload.address)
    return NonceResponse(
        address=record.address,
        nonce=record.value,
        expires_at=int(record.expires_at),
    )


@router.post(
    "/login",
    summary="Authenticate with a signed nonce",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
    responses=_CLIENT_ERRORS,
)
async def login_user(
    payload: LoginRequest,
    response: Response,
    login: LoginProtocolDep,
) -> LoginResponse:
    """Verify the signed challenge and set the session cookie."""
    result = login.verify(payload.address, payload.message, payload.signature)
    response.headers.append("set-cookie", result.cookie_directive)
    return LoginResponse(success=True, address=result.address, token=result.display_token)


@router.get(
    "/session",
    summary="Describe the current session",
    response_model=SessionResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def read_session(session: CurrentSessionDep) -> SessionResponse:
    return SessionResponse(address=session.address, expires_at=session.expires_at)


@router.post(
    "/logout",
    summary="Drop the session cookie",
    response_model=LogoutResponse,
)
async def logout_user(response: Response, session_manager: SessionManagerDep) -> LogoutResponse:
    """Tell the client to delete its session cookie.

    Sessions are not tracked server-side, so a copied token stays valid
    until it expires.
    """
    response.headers.append("set-cookie", session_manager.clear_cookie_directive())
    return LogoutResponse(success=True)
