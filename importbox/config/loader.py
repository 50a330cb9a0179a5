"""Configuration loader for importbox.

Loads configuration from a TOML file. Environment variables can override
any configuration value.
"""

import logging
import os
from pathlib import Path
from typing import Any

from importbox.config.schema import ImportboxConfig

logger = logging.getLogger(__name__)

# Try to import tomllib (Python 3.11+) or fall back to tomli
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found]

ENV_PREFIX = "IMPORTBOX"

INT_KEYS = ("max_rows",)
FLOAT_KEYS = ("similarity_threshold", "amount_tolerance", "lead_match_threshold")


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (working directory)
    2. ~/.config/importbox/config.toml (user config)
    3. /etc/importbox/config.toml (system config)
    """
    return [
        Path.cwd() / "config.toml",
        Path.home() / ".config" / "importbox" / "config.toml",
        Path("/etc/importbox/config.toml"),
    ]


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found config file: {path}")
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = ENV_PREFIX) -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - IMPORTBOX_IMPORT_MAX_ROWS -> config_dict["import"]["max_rows"]
    - IMPORTBOX_DUPLICATES_SIMILARITY_THRESHOLD -> config_dict["duplicates"]["similarity_threshold"]
    - IMPORTBOX_LOG_LEVEL -> config_dict["logging"]["level"]

    Note: This modifies config_dict in place.
    """
    env_mappings = {
        # Import
        f"{prefix}_IMPORT_MAX_ROWS": ("import", "max_rows"),
        f"{prefix}_MAX_ROWS": ("import", "max_rows"),  # Shorthand
        # Duplicates
        f"{prefix}_DUPLICATES_SIMILARITY_THRESHOLD": ("duplicates", "similarity_threshold"),
        f"{prefix}_DUPLICATES_AMOUNT_TOLERANCE": ("duplicates", "amount_tolerance"),
        f"{prefix}_DUPLICATES_LEAD_MATCH_THRESHOLD": ("duplicates", "lead_match_threshold"),
        # Logging
        f"{prefix}_LOGGING_LEVEL": ("logging", "level"),
        f"{prefix}_LOG_LEVEL": ("logging", "level"),  # Shorthand
    }

    for env_var, path in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        section, key = path
        config_dict.setdefault(section, {})

        if key in INT_KEYS:
            config_dict[section][key] = int(value)
        elif key in FLOAT_KEYS:
            config_dict[section][key] = float(value)
        elif key == "level":
            config_dict[section][key] = value.upper()
        else:
            config_dict[section][key] = value


def load_config(config_file: Path | None = None) -> ImportboxConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        ImportboxConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info(f"Loading config from: {config_file}")
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    apply_env_overrides(config_dict)

    return ImportboxConfig(**config_dict)
