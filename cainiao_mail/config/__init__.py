"""Configuration module for the Cainiao mail summary project."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
