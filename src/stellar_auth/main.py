"""Main entry point for the Stellar auth application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stellar_auth.api.v1 import auth_router
from stellar_auth.core.errors import AuthError, ErrorKind
from stellar_auth.core.i18n import select_language, translate
from stellar_auth.core.settings import Settings, get_settings
from stellar_auth.services.nonce_store import NonceStore
from stellar_auth.services.session import SessionManager

logger = logging.getLogger(__name__)


def _error_response(request: Request, kind: ErrorKind, status_code: int) -> JSONResponse:
    settings: Settings = request.app.state.settings
    language = select_language(
        request.headers.get("accept-language"),
        default=settings.default_language,
    )
    return JSONResponse(status_code=status_code, content={"error": translate(kind, language)})


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    return _error_response(request, exc.kind, exc.status_code)


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Malformed request to %s: %s", request.url.path, exc)
    return _error_response(request, ErrorKind.MISSING_FIELDS, status.HTTP_400_BAD_REQUEST)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return _error_response(
        request,
        ErrorKind.INTERNAL_FAILURE,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Configuration to use; loaded from the environment when omitted

    Returns:
        A FastAPI app whose nonce store and session manager live for the
        lifetime of the app
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.nonce_store = NonceStore(ttl_seconds=settings.nonce_ttl_seconds)
        app.state.session_manager = SessionManager(
            settings.session_secret,
            ttl_seconds=settings.session_ttl_seconds,
            algorithm=settings.jwt_algorithm,
            cookie_name=settings.session_cookie_name,
            secure_cookies=settings.is_production,
        )
        logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
        try:
            yield
        finally:
            app.state.nonce_store.clear()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Challenge-response wallet login for Stellar accounts",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("stellar_auth.main:app", host="0.0.0.0", port=8000)
