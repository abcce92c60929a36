"""Configuration management for sitelens."""

from .settings import (
    ApiSettings,
    AppSettings,
    ScrapingSettings,
    SessionSettings,
    get_settings,
    reload_settings,
)
from .types import ConfigError

__all__ = [
    "AppSettings",
    "ApiSettings",
    "ScrapingSettings",
    "SessionSettings",
    "get_settings",
    "reload_settings",
    "ConfigError",
]
