# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.MONGODB_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Every value has a fallback so the API starts against a local MongoDB
# without any configuration.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# static/ lives next to the app/, core/ and lib/ packages
DEFAULT_STATIC_PATH = str(Path(__file__).resolve().parent.parent / "static")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    DB_NAME: str = Field(
        default="myApp",
        min_length=1,
        description="Database holding the users collection"
    )

    COLL_NAME: str = Field(
        default="users",
        min_length=1,
        description="Collection storing one document per user"
    )

    MONGODB_TIMEOUT_MS: int = Field(
        default=30000,
        ge=1,
        description="Server selection timeout for the MongoDB driver"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    WORKERS: int = Field(
        default=2,
        ge=1,
        le=64,
        description="Number of uvicorn worker processes"
    )

    PATH_STATIC: str = Field(
        default=DEFAULT_STATIC_PATH,
        description="Directory with favicon.ico, welcome.html, 404.html and other static files"
    )

    # -------------------------------------------------------------------------
    # Users Listing
    # -------------------------------------------------------------------------

    USERS_TOTAL_SCOPE: Literal["matching", "all"] = Field(
        default="matching",
        description="What the `total` field of GET /users counts: documents matching the search, or the whole collection"
    )

    # -------------------------------------------------------------------------
    # QR Rendering
    # -------------------------------------------------------------------------

    QR_SCALE: int = Field(
        default=4,
        ge=1,
        le=50,
        description="Size of one QR module in SVG user units"
    )

    QR_ERROR_LEVEL: Literal["l", "m", "q", "h"] = Field(
        default="m",
        description="QR error correction level"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing the session cookie"
    )

    SESSION_COOKIE_SECURE: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    CORS_MAX_AGE: int = Field(
        default=3600,
        ge=0,
        description="How long browsers may cache a preflight response, in seconds"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty variables as unset so defaults apply
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
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
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def static_dir(self) -> Path:
        return Path(self.PATH_STATIC)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

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
