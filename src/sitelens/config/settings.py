"""Pydantic settings models for configuration management."""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from .types import ConfigError


class ApiSettings(BaseModel):
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if v <= 0 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


class ScrapingSettings(BaseModel):
    """Page fetching configuration."""

    user_agent: str = "Mozilla/5.0 (compatible; SiteLens/0.1)"
    # None disables the timeout entirely
    timeout_seconds: Optional[float] = None
    follow_redirects: bool = True

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v):
        if not v or not v.strip():
            raise ValueError("User agent cannot be empty")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class SessionSettings(BaseModel):
    """Scraping session listing configuration."""

    recent_limit: int = 10

    @field_validator("recent_limit")
    @classmethod
    def validate_recent_limit(cls, v):
        if v <= 0:
            raise ValueError("Recent limit must be positive")
        return v


class AppSettings(BaseSettings):
    """Main application settings."""

    debug: bool = False
    development: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    api: ApiSettings = Field(default_factory=ApiSettings)
    scraping: ScrapingSettings = Field(default_factory=ScrapingSettings)
    sessions: SessionSettings = Field(default_factory=SessionSettings)

    class Config:
        env_file = ".env"
        env_nested_delimiter = "__"
        case_sensitive = False
        extra = "ignore"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> AppSettings:
    """Get the application settings instance."""
    try:
        return AppSettings()
    except Exception as e:
        raise ConfigError(f"Failed to load settings: {str(e)}") from e


def reload_settings() -> AppSettings:
    """Force reload of settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
