"""Application settings and configuration.

This module defines all configuration options for the Stellar auth service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SESSION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files. The
    session secret has no default: the process refuses to start without it.
    """

    # Application metadata
    app_name: str = Field(default="Stellar Auth", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Session sealing
    session_secret: str = Field(alias="SESSION_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_ttl_seconds: int = Field(default=60 * 60 * 24 * 7, gt=0, alias="SESSION_TTL_SECONDS")
    session_cookie_name: str = Field(default="stellar_session", alias="SESSION_COOKIE_NAME")

    # Login challenges
    nonce_ttl_seconds: int = Field(default=300, gt=0, alias="NONCE_TTL_SECONDS")

    # Localization
    default_language: str = Field(default="en", alias="DEFAULT_LANGUAGE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=[], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("session_secret")
    @classmethod
    def _check_secret_length(cls, value: str) -> str:
        if len(value) < MIN_SESSION_SECRET_LENGTH:
            raise ValueError(
                f"SESSION_SECRET must be at least {MIN_SESSION_SECRET_LENGTH} characters"
            )
        return value

    @property
    def is_production(self) -> bool:
        """Return True when running with production transport guarantees.

        Returns:
            True if ``APP_ENV`` is ``production`` (case-insensitive)
        """
        return self.app_env.lower() == "production"


def get_settings() -> Settings:
    """Load settings from the process environment."""
    return Settings()  # type: ignore[call-arg]
