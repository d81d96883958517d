"""Catalog of the application's pre-declared channels.

Channels can be added from anywhere, but declaring them here keeps a single
place that documents each channel's payload shape and default verbosity.
"""

from dataclasses import dataclass
from typing import Any

from .core.levels import LogLevel


@dataclass(frozen=True)
class ChannelSpec:
    """Declaration of a channel: name, payload type and default verbosity."""

    name: str
    payload_type: Any = None
    log_level: int = LogLevel.SILENT
    description: str | None = None


DEFAULT_CHANNELS: tuple[ChannelSpec, ...] = (
    ChannelSpec(
        name="appDataReceived",
        payload_type=Any,
        log_level=LogLevel.PAYLOAD,
        description="Application data loaded from the backend",
    ),
    ChannelSpec(
        name="terminalMsgReceived",
        payload_type=str,
        log_level=LogLevel.PAYLOAD,
        description="Line of text to append to the terminal",
    ),
    ChannelSpec(
        name="windowFocusChanged",
        payload_type=bool,
        log_level=LogLevel.PAYLOAD,
        description="Whether the application window has focus",
    ),
)
