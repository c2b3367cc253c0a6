# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DEFAULT_HASHING_FORMAT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Every value has a default, so the service starts with no configuration.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.obfuscation import ObfuscationFormat
from lib.fonts import DEFAULT_BOLD_FONT, DEFAULT_REGULAR_FONT

# Only the first three contact lines fit in the header band
MAX_CONTACT_LINES = 3


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    MAX_REQUEST_SIZE_KB: int = Field(
        default=1024,
        ge=1,
        le=10240,
        description="Maximum JSON body size in KB"
    )

    # -------------------------------------------------------------------------
    # Price Obfuscation
    # -------------------------------------------------------------------------

    DEFAULT_HASHING_FORMAT: ObfuscationFormat = Field(
        default=ObfuscationFormat.LETTER_SUBSTITUTION,
        description="Format used when a request has no (or an unknown) hashingFormat"
    )

    # -------------------------------------------------------------------------
    # Barcode Rendering (python-barcode ImageWriter options)
    # -------------------------------------------------------------------------
    # At 300 dpi a 0.254 mm module is 3 px wide

    BARCODE_MODULE_WIDTH_MM: float = Field(
        default=0.254,
        gt=0,
        description="Width of one bar module in mm"
    )

    BARCODE_MODULE_HEIGHT_MM: float = Field(
        default=10.0,
        gt=0,
        description="Bar height in mm"
    )

    BARCODE_QUIET_ZONE_MM: float = Field(
        default=2.5,
        ge=0,
        description="Blank margin left and right of the bars in mm"
    )

    BARCODE_FONT_SIZE: int = Field(
        default=10,
        ge=1,
        description="Point size of the human-readable text under the bars"
    )

    BARCODE_TEXT_DISTANCE_MM: float = Field(
        default=4.0,
        ge=0,
        description="Gap between bars and human-readable text in mm"
    )

    BARCODE_DPI: int = Field(
        default=300,
        ge=72,
        le=1200,
        description="Rendering resolution"
    )

    # -------------------------------------------------------------------------
    # Fonts
    # -------------------------------------------------------------------------

    FONT_REGULAR_PATH: str = Field(
        default=str(DEFAULT_REGULAR_FONT),
        description="Regular sans-serif TrueType file"
    )

    FONT_BOLD_PATH: str = Field(
        default=str(DEFAULT_BOLD_FONT),
        description="Bold display TrueType file"
    )

    # -------------------------------------------------------------------------
    # Branding (label header)
    # -------------------------------------------------------------------------

    BRAND_NAME: str = Field(
        default="PRICE LABEL",
        min_length=1,
        description="Company name drawn in the header band"
    )

    BRAND_TAGLINE: str = Field(
        default="Wholesale & Retail",
        description="Sub-label under the company name"
    )

    # Comma-separated, at most three lines are drawn
    BRAND_CONTACT_LINES: str = Field(
        default="+1 555 0100,sales@example.com",
        description="Right-aligned contact lines (comma-separated)"
    )

    BRAND_COLOR: str = Field(
        default="#1E3A8A",
        description="Header band fill color"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        # .env files may carry variables for other tools
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Handles comma-separated values and strips whitespace.
        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def contact_lines_list(self) -> list[str]:
        """
        Parse BRAND_CONTACT_LINES into at most MAX_CONTACT_LINES entries.

        Example: "+1 555 0100, sales@example.com" -> ["+1 555 0100", "sales@example.com"]
        """
        lines = [line.strip() for line in self.BRAND_CONTACT_LINES.split(",")]
        return [line for line in lines if line][:MAX_CONTACT_LINES]

    @property
    def max_request_size_bytes(self) -> int:
        """Convert KB to bytes for body size validation."""
        return self.MAX_REQUEST_SIZE_KB * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
