"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import os

from waypoint.core.constants import (
    TEAM_BATCH_SIZE as DEFAULT_TEAM_BATCH_SIZE,
    TEAM_CODE_LENGTH as DEFAULT_TEAM_CODE_LENGTH,
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database
    DATABASE_URL: str = "sqlite:///waypoint.db"

    # Public base URL embedded in QR codes, e.g. https://example.com
    SITE_URL: str = ""

    @field_validator('SITE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Store the site URL without a trailing slash."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    # Generated assets
    ASSET_DIR: str = "assets/codes"
    FONT_DIR: str = "assets/fonts"

    # Team provisioning
    TEAM_CODE_LENGTH: int = DEFAULT_TEAM_CODE_LENGTH
    TEAM_BATCH_SIZE: int = DEFAULT_TEAM_BATCH_SIZE
    TEAM_BATCH_MAX_RETRIES: int = 10  # Whole-batch retries on code conflicts

    # Application
    APP_TITLE: str = "Waypoint"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_JSON: bool = False

    # Database Connection Pool Configuration (ignored for SQLite)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT == "production":
            issues = []

            if not self.SITE_URL:
                issues.append("SITE_URL must be set so QR codes point somewhere")

            if self.DATABASE_URL.startswith("sqlite"):
                issues.append("DATABASE_URL should not point at SQLite in production")

            if self.TEAM_BATCH_SIZE < 1:
                issues.append("TEAM_BATCH_SIZE must be positive")

            if issues:
                raise ValueError(
                    "Production configuration errors:\n" +
                    "\n".join(f"  - {issue}" for issue in issues)
                )


settings = Settings()

# Validate production configuration on startup
if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
