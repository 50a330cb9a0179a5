"""Global settings instance for importbox.

Wraps the structured configuration (config.toml plus environment overrides)
in a flat, lazily loaded settings object.
"""

import logging

from importbox.config.loader import load_config
from importbox.config.schema import ImportboxConfig

logger = logging.getLogger(__name__)


class Settings:
    """Flat accessors over ImportboxConfig."""

    def __init__(self, config: ImportboxConfig | None = None):
        """Initialize settings.

        Args:
            config: Optional ImportboxConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()

    @property
    def config(self) -> ImportboxConfig:
        """Get the full configuration object."""
        return self._config

    # Import
    @property
    def max_rows(self) -> int:
        return self._config.import_.max_rows

    # Duplicates
    @property
    def similarity_threshold(self) -> float:
        return self._config.duplicates.similarity_threshold

    @property
    def amount_tolerance(self) -> float:
        return self._config.duplicates.amount_tolerance

    @property
    def lead_match_threshold(self) -> float:
        return self._config.duplicates.lead_match_threshold

    # Logging
    @property
    def log_level(self) -> str:
        return self._config.logging.level


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
