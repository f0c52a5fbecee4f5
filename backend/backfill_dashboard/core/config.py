"""
Core configuration module using Pydantic Settings.

Handles all application configuration with validation and type safety.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings are loaded from environment variables or .env file.
    Pydantic ensures type safety and validation at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    app_name: str = Field(default="Backfila", description="Application name")
    app_env: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Dashboard host")
    port: int = Field(default=8000, description="Dashboard port")

    # Backfill Backend
    backfila_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the backfill backend API",
    )
    backfila_timeout_seconds: float = Field(
        default=10.0, gt=0, le=120, description="Timeout for backend API calls"
    )
    logs_url_template: str = Field(
        default="http://localhost:5601/app/logs?query=backfill_run_id:{backfill_run_id}",
        description="External logs link, formatted with the backfill run id",
    )

    # Status Page
    auto_reload_seconds: int = Field(
        default=10,
        ge=0,
        le=3600,
        description="Refresh interval of the status page while running (0 disables)",
    )

    # Logging
    log_format: str = Field(default="json", description="Log format: json or text")
    log_file_enabled: bool = Field(
        default=False, description="Also write logs to a rotating file"
    )
    log_file_path: str = Field(default="logs/app.log", description="Path to log file")
    log_file_max_bytes: int = Field(
        default=10485760, description="Maximum log file size in bytes"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @field_validator("app_env")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of allowed values."""
        allowed = ["development", "staging", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"app_env must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("backfila_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once.
    This is the recommended pattern for FastAPI dependency injection.
    """
    return Settings()


# Global settings instance (use get_settings() for dependency injection)
settings = get_settings()
