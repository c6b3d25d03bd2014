"""Configuration module for accelsend."""

from .settings import ConfigurationError, Settings, get_settings


__all__ = ["ConfigurationError", "Settings", "get_settings"]
