"""Configuration and usage rules for vendoring runs."""

from rules.config import (
    ConfigError,
    ModVendorConfig,
    load_config,
)
from rules.usage import filter_modules, filter_vendor_set, usage_prefix

__all__ = [
    "ConfigError",
    "ModVendorConfig",
    "filter_modules",
    "filter_vendor_set",
    "load_config",
    "usage_prefix",
]
