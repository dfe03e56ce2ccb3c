"""Configuration module for the tax estimator."""

from .settings import Settings, get_settings
from .tax_config_loader import TaxConfigLoader, get_config_loader, clear_config_cache

__all__ = [
    "Settings",
    "get_settings",
    "TaxConfigLoader",
    "get_config_loader",
    "clear_config_cache",
]
