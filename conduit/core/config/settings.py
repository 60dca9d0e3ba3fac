"""Application settings.

Loaded once from environment variables (and an optional ``.env`` file)
via Pydantic Settings. Import the singleton from ``conduit.core.config``.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conduit.core.config.enums import Environment


class Settings(BaseSettings):
    """Conduit backend settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"
    API_URL: str = "http://localhost:8001"

    # Analytics
    ANALYTICS_ENABLED: bool = False
    POSTHOG_API_KEY: Optional[str] = None
    POSTHOG_HOST: str = "https://app.posthog.com"

    # Secrets
    ENCRYPTION_KEY: str = Field(..., description="Fernet key used by the local secret store")
    OAUTH_SECRET_PREFIX: str = Field(
        "conduit_oauth_workspace_",
        description="Prefix of every secret coordinate minted for an OAuth response",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper()

    @property
    def api_url(self) -> str:
        """Base API URL without trailing slash."""
        return self.API_URL.rstrip("/")
