"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    NonceRequest,
    NonceResponse,
    SessionResponse,
)

__all__ = [
    "ErrorResponse",
    "LoginRequest", "LoginResponse", "LogoutResponse",
    "NonceRequest", "NonceResponse",
    "SessionResponse",
]
