# -*- coding: utf-8 -*-

"""
Unit tests for the configuration module.
Verifies loading settings from environment variables.
"""

import importlib
import os
import sys
from unittest.mock import patch

import pytest
from loguru import logger

import request_validator.config as config_module


@pytest.fixture(autouse=True)
def restore_config():
    """Reload config with the real environment after each test."""
    yield
    importlib.reload(config_module)


def _reload_with(env):
    """Reload the config module with the given environment overrides."""
    with patch.dict(os.environ, env):
        importlib.reload(config_module)
    return config_module


class TestLogLevelConfig:
    """Tests for LOG_LEVEL configuration."""

    def test_default_log_level_is_info(self):
        """
        What it does: Verifies that LOG_LEVEL defaults to INFO.
        Purpose: Ensure that INFO is used when no environment variable is set.
        """
        print("Setup: Mocking os.getenv for LOG_LEVEL...")
        original_getenv = os.getenv

        def mock_getenv(key, default=None):
            if key == "LOG_LEVEL":
                return default
            return original_getenv(key, default)

        with patch.object(os, "getenv", side_effect=mock_getenv):
            importlib.reload(config_module)

            print(f"Comparing: Expected 'INFO', Got '{config_module.LOG_LEVEL}'")
            assert config_module.LOG_LEVEL == "INFO"

    def test_log_level_uppercase_conversion(self):
        """
        What it does: Verifies LOG_LEVEL conversion to uppercase.
        Purpose: Ensure that lowercase value is converted to uppercase.
        """
        config = _reload_with({"LOG_LEVEL": "debug"})

        assert config.LOG_LEVEL == "DEBUG"


class TestValidatorFlags:
    """Tests for VALIDATOR_* boolean settings."""

    def test_defaults(self):
        """
        What it does: Reloads config without VALIDATOR_* variables.
        Purpose: Ensure first-error reporting, format checks and middleware mode by default.
        """
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(config_module)

            assert config_module.ALL_ERRORS is False
            assert config_module.VALIDATE_FORMATS is True
            assert config_module.MIDDLEWARE_MODE is True

    @pytest.mark.parametrize("raw", ["true", "1", "yes", "TRUE", "Yes"])
    def test_all_errors_enabled_values(self, raw):
        """What it does: verifies accepted truthy spellings."""
        config = _reload_with({"VALIDATOR_ALL_ERRORS": raw})

        assert config.ALL_ERRORS is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", ""])
    def test_middleware_mode_disabled_values(self, raw):
        """What it does: verifies anything else disables the flag."""
        config = _reload_with({"VALIDATOR_MIDDLEWARE_MODE": raw})

        assert config.MIDDLEWARE_MODE is False

    def test_validate_formats_disabled(self):
        """What it does: verifies VALIDATOR_VALIDATE_FORMATS=false."""
        config = _reload_with({"VALIDATOR_VALIDATE_FORMATS": "false"})

        assert config.VALIDATE_FORMATS is False


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_returns_removable_sink_id(self):
        """
        What it does: Installs the stderr sink and removes it again.
        Purpose: Ensure the returned id identifies the added sink.
        """
        sink_id = config_module.configure_logging("warning")

        assert isinstance(sink_id, int)
        logger.remove(sink_id)
        logger.add(sys.stderr)
