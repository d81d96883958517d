"""Tests for signal tower configuration."""

import logging
import os
from unittest.mock import patch

from signal_tower.config import Settings, configure_logging


class TestSettings:
    def test_defaults(self):
        """Test default settings values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        assert settings.default_log_level == 0
        assert settings.global_log_level is None
        assert settings.fault_history == 100
        assert settings.register_default_channels is True
        assert settings.log_level == "INFO"

    def test_env_prefix(self):
        """Test settings load from SIGNAL_TOWER_ prefixed env vars."""
        env = {
            "SIGNAL_TOWER_DEFAULT_LOG_LEVEL": "1",
            "SIGNAL_TOWER_GLOBAL_LOG_LEVEL": "2",
            "SIGNAL_TOWER_FAULT_HISTORY": "10",
            "SIGNAL_TOWER_REGISTER_DEFAULT_CHANNELS": "false",
            "SIGNAL_TOWER_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()
        assert settings.default_log_level == 1
        assert settings.global_log_level == 2
        assert settings.fault_history == 10
        assert settings.register_default_channels is False
        assert settings.log_level == "debug"

    def test_partial_env(self):
        """Test settings with only some env vars set."""
        env = {
            "SIGNAL_TOWER_GLOBAL_LOG_LEVEL": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()
        assert settings.global_log_level == 0
        assert settings.default_log_level == 0


class TestConfigureLogging:
    def test_calls_basic_config(self):
        """Test configure_logging passes level and format to basicConfig."""
        settings = Settings(log_level="debug", log_format="%(message)s")
        with patch.object(logging, "basicConfig") as basic_config:
            configure_logging(settings)
        basic_config.assert_called_once_with(level="DEBUG", format="%(message)s")
