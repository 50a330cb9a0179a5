"""Tests for the importbox configuration system."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from importbox.config import settings
from importbox.config.loader import (
    apply_env_overrides,
    find_config_file,
    get_config_search_paths,
    load_config,
    load_toml_file,
)
from importbox.config.schema import (
    DuplicatesConfig,
    ImportboxConfig,
    ImportConfig,
    LoggingConfig,
)
from importbox.config.settings import Settings, get_settings, reset_settings


class TestSchemaDefaults:
    """Test default values in schema models."""

    def test_import_config_defaults(self):
        """Test ImportConfig has correct defaults."""
        assert ImportConfig().max_rows == 5000

    def test_duplicates_config_defaults(self):
        """Test DuplicatesConfig has correct defaults."""
        config = DuplicatesConfig()
        assert config.similarity_threshold == 80
        assert config.amount_tolerance == 0.01
        assert config.lead_match_threshold == 85

    def test_logging_config_defaults(self):
        """Test LoggingConfig has correct defaults."""
        assert LoggingConfig().level == "INFO"

    def test_importbox_config_defaults(self):
        """Test ImportboxConfig nests every section."""
        config = ImportboxConfig()
        assert isinstance(config.import_, ImportConfig)
        assert isinstance(config.duplicates, DuplicatesConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_invalid_values_rejected(self):
        """Test out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            DuplicatesConfig(similarity_threshold=150)
        with pytest.raises(ValidationError):
            ImportConfig(max_rows=0)
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")


class TestConfigSearchPaths:
    """Test configuration file search paths."""

    def test_config_search_paths_order(self):
        """Test config search paths are in correct priority order."""
        paths = get_config_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "config.toml"
        assert paths[1] == Path.home() / ".config" / "importbox" / "config.toml"
        assert paths[2] == Path("/etc/importbox/config.toml")

    def test_find_config_file_none(self):
        """Test no config file is found in a clean directory."""
        assert find_config_file() is None

    def test_find_config_file_in_cwd(self, tmp_path):
        """Test a config.toml in the working directory is found."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[import]\nmax_rows = 10\n")
        assert find_config_file() == config_file


class TestTomlLoading:
    """Test TOML file loading."""

    def test_load_toml_file(self, tmp_path):
        """Test loading a valid TOML file."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[import]\nmax_rows = 100\n\n[logging]\nlevel = "DEBUG"\n')

        data = load_toml_file(config_file)
        assert data["import"]["max_rows"] == 100
        assert data["logging"]["level"] == "DEBUG"

    def test_load_config_from_file(self, tmp_path):
        """Test load_config with a specific file."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            "[import]\nmax_rows = 250\n\n[duplicates]\nsimilarity_threshold = 90\n"
        )

        config = load_config(config_file)
        assert config.import_.max_rows == 250
        assert config.duplicates.similarity_threshold == 90
        # Defaults should still apply
        assert config.duplicates.amount_tolerance == 0.01
        assert config.logging.level == "INFO"

    def test_load_config_without_file(self):
        """Test defaults are used when no file exists."""
        config = load_config()
        assert config == ImportboxConfig()

    def test_load_config_invalid_file_values(self, tmp_path):
        """Test invalid values in the file surface as a validation error."""
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[duplicates]\nlead_match_threshold = 900\n")
        with pytest.raises(ValidationError):
            load_config(config_file)


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_env_overrides_sections(self, monkeypatch):
        """Test each documented variable lands in its section."""
        monkeypatch.setenv("IMPORTBOX_IMPORT_MAX_ROWS", "42")
        monkeypatch.setenv("IMPORTBOX_DUPLICATES_SIMILARITY_THRESHOLD", "70")
        monkeypatch.setenv("IMPORTBOX_DUPLICATES_AMOUNT_TOLERANCE", "0.5")
        monkeypatch.setenv("IMPORTBOX_DUPLICATES_LEAD_MATCH_THRESHOLD", "90")
        monkeypatch.setenv("IMPORTBOX_LOG_LEVEL", "debug")

        config_dict: dict = {}
        apply_env_overrides(config_dict)
        assert config_dict == {
            "import": {"max_rows": 42},
            "duplicates": {
                "similarity_threshold": 70.0,
                "amount_tolerance": 0.5,
                "lead_match_threshold": 90.0,
            },
            "logging": {"level": "DEBUG"},
        }

    def test_env_overrides_file_values(self, tmp_path, monkeypatch):
        """Test environment variables take precedence over the file."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[import]\nmax_rows = 250\n")
        monkeypatch.setenv("IMPORTBOX_MAX_ROWS", "7")

        assert load_config(config_file).import_.max_rows == 7

    def test_env_override_bad_number(self, monkeypatch):
        """Test a non-numeric override fails loudly."""
        monkeypatch.setenv("IMPORTBOX_MAX_ROWS", "lots")
        with pytest.raises(ValueError):
            load_config()


class TestSettings:
    """Test the flat settings object."""

    def test_settings_properties(self):
        """Test flat accessors read the structured config."""
        config = ImportboxConfig(
            import_=ImportConfig(max_rows=3),
            duplicates=DuplicatesConfig(similarity_threshold=60, lead_match_threshold=70),
            logging=LoggingConfig(level="WARNING"),
        )
        s = Settings(config=config)
        assert s.config is config
        assert s.max_rows == 3
        assert s.similarity_threshold == 60
        assert s.amount_tolerance == 0.01
        assert s.lead_match_threshold == 70
        assert s.log_level == "WARNING"

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance until reset."""
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first

    def test_settings_proxy(self, monkeypatch):
        """Test the module-level proxy loads settings lazily."""
        monkeypatch.setenv("IMPORTBOX_LOG_LEVEL", "ERROR")
        reset_settings()
        assert settings.log_level == "ERROR"
        assert settings.max_rows == 5000
