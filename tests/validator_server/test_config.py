"""Tests for validator server configuration."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "src"))

from tsschema.validator_server.config import ValidatorServerConfig, get_config, reset_config, set_config


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


class TestValidatorServerConfig:
    """Test configuration defaults, environment loading and validation."""

    def test_defaults(self):
        config = ValidatorServerConfig()

        assert config.project_root == "."
        assert config.max_file_size_mb == 5
        assert config.validator_name_suffix == ""
        assert config.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("MCP_FILE_ROOT", "/srv/app")
        monkeypatch.setenv("MAX_FILE_SIZE_MB", "2")
        monkeypatch.setenv("VALIDATOR_NAME_SUFFIX", "Schema")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = ValidatorServerConfig.from_environment()

        assert config.project_root == "/srv/app"
        assert config.max_file_size_mb == 2
        assert config.validator_name_suffix == "Schema"
        assert config.log_level == "DEBUG"

    def test_invalid_values_raise(self):
        with pytest.raises(ValueError, match="max_file_size_mb must be positive"):
            ValidatorServerConfig(max_file_size_mb=0)

        with pytest.raises(ValueError, match="log_level must be one of"):
            ValidatorServerConfig(log_level="LOUD")

    def test_global_instance(self, monkeypatch):
        monkeypatch.setenv("VALIDATOR_NAME_SUFFIX", "V")
        assert get_config() is get_config()
        assert get_config().validator_name_suffix == "V"

        custom = ValidatorServerConfig(validator_name_suffix="Other")
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config() is not custom
