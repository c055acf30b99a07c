"""Configuration package."""

from neighborhood_registry.config.settings import RegistrySettings, get_settings

__all__ = [
    "RegistrySettings",
    "get_settings",
]
