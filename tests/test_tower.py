"""Tests for the process-wide tower."""

import os
from unittest.mock import MagicMock, patch

import pytest

import signal_tower.tower as tower_module
from signal_tower import get_tower, init_tower
from signal_tower.channels import DEFAULT_CHANNELS
from signal_tower.config import Settings
from signal_tower.core.registry import SignalTower


@pytest.fixture(autouse=True)
def reset_tower():
    """Drop the process-wide tower around each test."""
    tower_module._tower = None
    yield
    tower_module._tower = None


class TestGetTower:
    def test_returns_same_instance(self):
        """Test get_tower returns one tower for the process."""
        with patch.dict(os.environ, {}, clear=True):
            first = get_tower()
        second = get_tower()
        assert isinstance(first, SignalTower)
        assert first is second

    def test_default_channels_registered(self):
        """Test the default tower declares the catalog channels."""
        with patch.dict(os.environ, {}, clear=True):
            tower = get_tower()
        for spec in DEFAULT_CHANNELS:
            assert spec.name in tower
            assert tower[spec.name].log_level == spec.log_level

    def test_shared_between_call_sites(self):
        """Test a dispatch from one call site reaches a subscriber from another."""
        with patch.dict(os.environ, {}, clear=True):
            consumer = get_tower()
        cb = MagicMock()
        consumer.terminalMsgReceived.subscribe(cb)

        get_tower().terminalMsgReceived.dispatch("hello")

        cb.assert_called_once_with("hello")


class TestInitTower:
    def test_uses_settings(self):
        """Test init_tower honours explicit settings."""
        tower = init_tower(Settings(register_default_channels=False, default_log_level=1))
        assert len(tower) == 0
        assert tower.get_or_create("foo").log_level == 1
        assert get_tower() is tower

    def test_second_init_returns_existing(self):
        """Test the tower is not replaced once initialized."""
        first = init_tower(Settings(register_default_channels=False))
        second = init_tower(Settings(register_default_channels=True))
        assert first is second
        assert len(second) == 0

    def test_settings_from_env(self):
        """Test init_tower reads SIGNAL_TOWER_ environment variables."""
        env = {
            "SIGNAL_TOWER_GLOBAL_LOG_LEVEL": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            tower = init_tower()
        assert tower.terminalMsgReceived.log_level == 0
        tower.set_log_level()
        assert tower.terminalMsgReceived.log_level == 2
