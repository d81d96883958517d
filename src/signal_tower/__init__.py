"""Signal Tower — in-process named signals with replay of the latest payload."""

from .channels import DEFAULT_CHANNELS, ChannelSpec
from .config import Settings, configure_logging
from .core import NO_PAYLOAD, RESERVED_NAMES, Channel, LogLevel, SignalTower, Subscription
from .errors import (
    ChannelNameError,
    InvalidNameError,
    PayloadValidationError,
    ReservedNameError,
    SignalTowerError,
    SubscriberFault,
)
from .models import ChannelInfo, FaultInfo, TowerSnapshot
from .tower import get_tower, init_tower

__all__ = [
    # Core
    "Channel",
    "LogLevel",
    "NO_PAYLOAD",
    "RESERVED_NAMES",
    "SignalTower",
    "Subscription",
    # Process-wide access
    "get_tower",
    "init_tower",
    # Configuration
    "ChannelSpec",
    "DEFAULT_CHANNELS",
    "Settings",
    "configure_logging",
    # Errors
    "ChannelNameError",
    "InvalidNameError",
    "PayloadValidationError",
    "ReservedNameError",
    "SignalTowerError",
    "SubscriberFault",
    # Snapshots
    "ChannelInfo",
    "FaultInfo",
    "TowerSnapshot",
]
