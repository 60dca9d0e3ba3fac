"""Configuration module for the Conduit backend.

Provides centralized configuration management with type-safe enums.

Usage:
    from conduit.core.config import settings, Environment

    # Access settings
    if settings.ANALYTICS_ENABLED:
        ...

    # Use enums for type safety
    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from conduit.core.config.enums import Environment
from conduit.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
