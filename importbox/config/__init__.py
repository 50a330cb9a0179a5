"""importbox configuration module.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables prefixed ``IMPORTBOX_`` (highest priority)
2. ./config.toml (working directory)
3. ~/.config/importbox/config.toml (user config)
4. /etc/importbox/config.toml (system config)
"""

from importbox.config.schema import (
    DuplicatesConfig,
    ImportboxConfig,
    ImportConfig,
    LoggingConfig,
)
from importbox.config.settings import Settings, get_settings, reset_settings, settings

__all__ = [
    "DuplicatesConfig",
    "ImportConfig",
    "ImportboxConfig",
    "LoggingConfig",
    "Settings",
    "get_settings",
    "reset_settings",
    "settings",
]
