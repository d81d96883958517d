"""Tests for the default channel catalog."""

import pytest

from signal_tower.channels import DEFAULT_CHANNELS
from signal_tower.core.levels import LogLevel, describe_level
from signal_tower.core.registry import SignalTower
from signal_tower.errors import PayloadValidationError


class TestDefaultChannels:
    def test_names(self):
        """Test the catalog declares the application channels."""
        names = [spec.name for spec in DEFAULT_CHANNELS]
        assert names == ["appDataReceived", "terminalMsgReceived", "windowFocusChanged"]

    def test_all_log_payloads(self):
        """Test every default channel logs its payload."""
        assert all(spec.log_level == LogLevel.PAYLOAD for spec in DEFAULT_CHANNELS)

    def test_terminal_channel_requires_text(self):
        """Test the terminal channel only accepts strings."""
        tower = SignalTower()
        tower.register_catalog(DEFAULT_CHANNELS)
        tower.terminalMsgReceived.dispatch("$ ls")
        with pytest.raises(PayloadValidationError):
            tower.terminalMsgReceived.dispatch(["$ ls"])

    def test_app_data_accepts_anything(self):
        """Test the app data channel accepts arbitrary payloads."""
        tower = SignalTower()
        tower.register_catalog(DEFAULT_CHANNELS)
        tower.appDataReceived.dispatch({"slides": []})
        assert tower.appDataReceived.get_latest() == {"slides": []}


class TestLevels:
    @pytest.mark.parametrize(
        "level,label",
        [(-1, "silent"), (0, "silent"), (1, "name"), (2, "payload"), (5, "payload")],
    )
    def test_describe_level(self, level, label):
        assert describe_level(level) == label
