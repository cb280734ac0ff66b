"""
Configuration management for the Timeline Layout Engine.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LayoutSettings(BaseSettings):
    """Presentation constants for the Gantt layout."""

    model_config = SettingsConfigDict(env_prefix="LAYOUT_")

    min_bar_width_pct: float = Field(default=2.0, ge=0.0, le=100.0)
    render_width: int = Field(default=60, ge=10, le=400)
    date_label_format: str = Field(default="%b %d, %Y")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_format: bool = Field(default=True, alias="JSON_LOGS")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        alias="CORS_ORIGINS"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class Settings(BaseSettings):
    """Main application settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="Timeline Layout Engine", alias="APP_NAME")
    api_version: str = Field(default="v1", alias="API_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    workers: int = Field(default=2, alias="WORKERS")

    # Metrics
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")

    @property
    def layout(self) -> LayoutSettings:
        return LayoutSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def security(self) -> SecuritySettings:
        return SecuritySettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for dependency injection
def get_config() -> Settings:
    """Get settings for FastAPI dependency injection."""
    return get_settings()
