"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Verbose errors, permissive CORS, sample menu loaded
    - STAGING: Production behaviour against test clients
    - PRODUCTION: Internal error details hidden from callers

Usage:
    from orderhub.core.config import get_settings

    settings = get_settings()
    if settings.expose_error_details:
        # include exception text in 500 responses

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work, error details surfaced to callers
        PRODUCTION: Live environment, generic error messages only
        STAGING: Pre-production, behaves like production
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server
        cors_origins: Comma-separated list of allowed origins

        # Business Configuration
        restaurant_name: Display name used in welcome messages
        default_payment_method: Payment method stored when none is given
        seed_menu: Load the sample catalog at startup

        # Estimation
        estimate_*: Constants for the preparation time estimate

        # Realtime
        broadcast_instrumentation: Emit orderCreated/orderStatusChanged notices
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Realtime Order Backend",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8000,
        description="API server port"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    restaurant_name: str = Field(
        default="Zaika Junction",
        description="Restaurant display name"
    )
    default_payment_method: str = Field(
        default="COD",
        description="Payment method recorded when the order does not name one"
    )
    seed_menu: bool = Field(
        default=True,
        description="Load the sample menu at startup"
    )

    # ==========================================================================
    # PREPARATION TIME ESTIMATE (minutes)
    # ==========================================================================

    estimate_default_minutes: int = Field(
        default=30,
        description="Estimate reported for orders without line items"
    )
    estimate_base_minutes: int = Field(
        default=15,
        description="Fixed kitchen overhead added to every order"
    )
    estimate_fallback_item_minutes: int = Field(
        default=10,
        description="Preparation time used when a line's menu item is unknown"
    )
    estimate_min_minutes: int = Field(
        default=15,
        description="Lower clamp for the estimate"
    )
    estimate_max_minutes: int = Field(
        default=60,
        description="Upper clamp for the estimate"
    )

    # ==========================================================================
    # REALTIME CHANNEL
    # ==========================================================================

    broadcast_instrumentation: bool = Field(
        default=True,
        description="Also broadcast orderCreated/orderStatusChanged notices to everyone"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def expose_error_details(self) -> bool:
        """Internal exception text is only returned in development or debug."""
        return self.debug or self.is_development

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-32s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger("orderhub")
