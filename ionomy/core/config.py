"""
Configuration Management Module

This module handles loading, validating, and providing access to client configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Provides type-safe access to configuration values
- Handles optional credentials (public endpoints work without them)
- Normalizes the API base URL so endpoint paths can be appended directly

Usage:
    from ionomy.core.config import settings

    print(settings.ionomy_base_url)
    print(settings.has_credentials)
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://ionomy.com/api/v1/"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Client Settings

    Values are automatically loaded from environment variables or .env file.
    Every value can be overridden per client through IonomyAPIClient's constructor.

    Attributes:
        ionomy_base_url: Base URL that endpoint paths are appended to
        ionomy_api_key: API key (optional, not needed for public endpoints)
        ionomy_api_secret: API secret used to sign requests (optional)
        ionomy_keep_alive: Reuse HTTP connections between requests
        request_timeout: Total timeout for one HTTP request in seconds
        log_level: Level of the "ionomy" logger
    """

    # ============================================
    # Ionomy API Configuration
    # ============================================

    ionomy_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Ionomy API base URL"
    )

    ionomy_api_key: str = Field(
        default="",
        description="Ionomy API key (optional for public endpoints)"
    )

    ionomy_api_secret: str = Field(
        default="",
        description="Ionomy API secret (optional for public endpoints)"
    )

    ionomy_keep_alive: bool = Field(
        default=True,
        description="Keep HTTP connections alive between requests"
    )

    # ============================================
    # Transport & Logging
    # ============================================

    request_timeout: float = Field(
        default=30,
        description="HTTP request timeout in seconds"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @property
    def has_credentials(self) -> bool:
        """True when both API key and secret are set (requests will be signed)."""
        return bool(self.ionomy_api_key and self.ionomy_api_secret)

    @property
    def normalized_base_url(self) -> str:
        """
        Base URL guaranteed to end with a slash.

        Example:
            >>> Settings(ionomy_base_url="https://ionomy.com/api/v1").normalized_base_url
            'https://ionomy.com/api/v1/'
        """
        return normalize_base_url(self.ionomy_base_url)


def normalize_base_url(base_url: Optional[str]) -> str:
    """Return ``base_url`` with a trailing slash, or the default URL when empty."""
    base_url = (base_url or "").strip() or DEFAULT_BASE_URL
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


# Shared settings instance, loaded once at import
settings = Settings()


def validate_configuration(config: Optional[Settings] = None) -> None:
    """
    Validate configuration before creating clients.

    Args:
        config: Settings to check (defaults to the shared instance)

    Raises:
        ValueError: If a setting is invalid
    """
    # Imported here because logging.py reads the shared settings at import
    from ionomy.core.logging import logger

    config = config or settings

    if not config.normalized_base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid IONOMY_BASE_URL: '{config.ionomy_base_url}'. "
            f"Must start with http:// or https://"
        )

    if config.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {config.request_timeout}. Must be positive")

    if config.log_level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if bool(config.ionomy_api_key) != bool(config.ionomy_api_secret):
        logger.warning(
            "Only one of IONOMY_API_KEY / IONOMY_API_SECRET is set; "
            "requests will be sent unsigned"
        )

    logger.info("Configuration validated successfully")
    logger.info(f"Ionomy API: {config.normalized_base_url}")
    logger.info(f"Signed requests: {'enabled' if config.has_credentials else 'disabled'}")
    logger.info(f"Keep-alive: {config.ionomy_keep_alive}, timeout: {config.request_timeout}s")
