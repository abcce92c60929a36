"""Type definitions for configuration system."""


class ConfigError(Exception):
    """Base exception for configuration-related errors."""

    pass
