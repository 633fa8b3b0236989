"""Configuration and snapshot loading."""

from .settings import ConfigurationError, Settings, load_snapshot

__all__ = ["ConfigurationError", "Settings", "load_snapshot"]
