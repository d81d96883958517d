"""Exceptions raised by the signal tower."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable


class SignalTowerError(Exception):
    """Base exception for all signal tower errors."""


class ChannelNameError(SignalTowerError, ValueError):
    """A channel could not be created under the requested name."""

    def __init__(self, name: Any, reason: str) -> None:
        super().__init__(f"Failed to add signal with name {name!r}: {reason}")
        self.name = name
        self.reason = reason


class InvalidNameError(ChannelNameError):
    """Raised when a channel name is empty or not a string."""

    def __init__(self, name: Any) -> None:
        super().__init__(name, "signal name is required")


class ReservedNameError(ChannelNameError):
    """Raised when a channel name collides with a tower attribute."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"signal name {name} is reserved")


class PayloadValidationError(SignalTowerError, TypeError):
    """Raised when a dispatched payload does not match the channel's payload type."""

    def __init__(self, channel: str, payload_type: Any, cause: Exception) -> None:
        super().__init__(
            f"Payload rejected by signal {channel!r} (expected {payload_type!r}): {cause}"
        )
        self.channel = channel
        self.payload_type = payload_type


@dataclass(frozen=True)
class SubscriberFault:
    """Record of a subscriber callback that raised during delivery.

    Faults are never raised out of ``dispatch``; they are logged and kept in
    the tower's fault history.
    """

    channel: str
    subscriber: Callable[..., Any]
    error: BaseException
    replay: bool = False
    timestamp: float = field(default_factory=time.time)

    @property
    def subscriber_name(self) -> str:
        return getattr(self.subscriber, "__qualname__", repr(self.subscriber))
