from .channel import NO_PAYLOAD, Channel, Subscription
from .levels import LogLevel
from .registry import RESERVED_NAMES, SignalTower

__all__ = [
    "NO_PAYLOAD",
    "Channel",
    "LogLevel",
    "RESERVED_NAMES",
    "SignalTower",
    "Subscription",
]
