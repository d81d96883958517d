"""SignalTower — registry of named channels and their logging control plane."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from ..errors import (
    ChannelNameError,
    InvalidNameError,
    ReservedNameError,
    SubscriberFault,
)
from ..models import ChannelInfo, FaultInfo, TowerSnapshot
from .channel import Channel
from .levels import LogLevel, describe_level

if TYPE_CHECKING:
    from ..channels import ChannelSpec
    from ..config import Settings

logger = logging.getLogger(__name__)


class SignalTower:
    """Registry of named channels.

    Channels are created on first request and live as long as the tower.
    Existing channels are also reachable as items (``tower["name"]``) and as
    attributes (``tower.name``), which is why the tower's own attribute names
    cannot be used as channel names.

    Usage::

        tower = SignalTower()
        messages = tower.get_or_create("terminalMsgReceived", LogLevel.NAME)
        sub = messages.subscribe(print)
        messages.dispatch("hello")
        sub.unsubscribe()
    """

    def __init__(
        self,
        default_log_level: int = LogLevel.SILENT,
        fault_history: int = 100,
    ) -> None:
        self._channels: dict[str, Channel] = {}
        self._lock = threading.Lock()
        self._default_log_level = default_log_level
        self._faults: deque[SubscriberFault] = deque(maxlen=fault_history)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        catalog: Iterable[ChannelSpec] = (),
    ) -> SignalTower:
        """Build a tower from settings, registering ``catalog`` channels."""
        tower = cls(
            default_log_level=settings.default_log_level,
            fault_history=settings.fault_history,
        )
        tower.register_catalog(catalog)
        if settings.global_log_level is not None:
            tower.set_log_level(settings.global_log_level)
        return tower

    # Mapping-style access to existing channels (never creates)

    def __contains__(self, name: object) -> bool:
        return name in self._channels

    def __getitem__(self, name: str) -> Channel:
        return self._channels[name]

    def __getattr__(self, name: str) -> Channel:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._channels[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no signal named {name!r}"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._channels))

    def __len__(self) -> int:
        return len(self._channels)

    def __repr__(self) -> str:
        return f"SignalTower(channels={self.names})"

    @property
    def names(self) -> list[str]:
        """Get all channel names."""
        return list(self._channels.keys())

    @property
    def channels(self) -> list[Channel]:
        """Get all channels."""
        return list(self._channels.values())

    def get(self, name: str) -> Channel | None:
        """Get a channel by name without creating it."""
        return self._channels.get(name)

    def get_or_create(
        self,
        name: str,
        log_level: int | None = None,
        payload_type: Any = None,
        description: str | None = None,
    ) -> Channel:
        """Return the channel called ``name``, creating it if needed.

        The first registration wins: asking again for an existing channel
        returns it unchanged, whatever level or payload type is passed.

        Raises:
            InvalidNameError: ``name`` is empty or not a string.
            ReservedNameError: ``name`` is one of the tower's attribute names.
        """
        try:
            self._validate_name(name)
        except ChannelNameError as e:
            logger.error("Signal tower rejected channel name: %s", e)
            raise

        channel = self._channels.get(name)
        if channel is not None:
            return channel

        with self._lock:
            channel = self._channels.get(name)
            if channel is None:
                level = self._default_log_level if log_level is None else log_level
                channel = Channel(
                    name,
                    log_level=level,
                    payload_type=payload_type,
                    description=description,
                    fault_handler=self._record_fault,
                )
                self._channels[name] = channel
                logger.debug("Created signal %s (log level %s)", name, level)
        return channel

    def register_catalog(self, specs: Iterable[ChannelSpec]) -> list[Channel]:
        """Get or create every channel declared in ``specs``."""
        return [
            self.get_or_create(
                spec.name,
                log_level=spec.log_level,
                payload_type=spec.payload_type,
                description=spec.description,
            )
            for spec in specs
        ]

    def set_log_level(self, level: int | None = None) -> None:
        """Set every channel's log level, or restore the originals when ``level`` is None."""
        for channel in self.channels:
            if level is None:
                channel.reset_log_level()
            else:
                channel.log_level = int(level)
        if level is None:
            logger.debug("Restored original log level of all signals")
        else:
            logger.debug("Set log level of all signals to %s", level)

    def hydrate(self, payloads: Mapping[str, Any]) -> None:
        """Dispatch each payload on its channel, e.g. from ``TowerSnapshot.latest_payloads()``.

        Every name, and every payload bound for an existing typed channel, is
        validated before anything is dispatched.
        """
        for name, payload in payloads.items():
            self._validate_name(name)
            channel = self._channels.get(name)
            if channel is not None:
                channel.validate(payload)
        for name, payload in payloads.items():
            self.get_or_create(name).dispatch(payload)

    def snapshot(self) -> TowerSnapshot:
        """Describe every channel and the recorded faults."""
        return TowerSnapshot(
            channels=[_channel_info(channel) for channel in self.channels],
            faults=[
                FaultInfo(
                    channel=fault.channel,
                    subscriber=fault.subscriber_name,
                    error=repr(fault.error),
                    replay=fault.replay,
                    timestamp=fault.timestamp,
                )
                for fault in self.faults
            ],
        )

    @property
    def faults(self) -> tuple[SubscriberFault, ...]:
        """Most recent subscriber faults, oldest first."""
        return tuple(self._faults)

    def clear_faults(self) -> None:
        self._faults.clear()

    def _record_fault(self, fault: SubscriberFault) -> None:
        self._faults.append(fault)

    @staticmethod
    def _validate_name(name: Any) -> None:
        if not name or not isinstance(name, str):
            raise InvalidNameError(name)
        if name in RESERVED_NAMES:
            raise ReservedNameError(name)


RESERVED_NAMES: frozenset[str] = frozenset(
    name for name in dir(SignalTower) if not name.startswith("_")
)


def _type_name(payload_type: Any) -> str | None:
    if payload_type is None:
        return None
    if isinstance(payload_type, type):
        return payload_type.__name__
    return repr(payload_type)


def _channel_info(channel: Channel) -> ChannelInfo:
    return ChannelInfo(
        name=channel.name,
        log_level=channel.log_level,
        original_log_level=channel.original_log_level,
        verbosity=describe_level(channel.log_level),
        subscriber_count=channel.subscriber_count,
        dispatch_count=channel.dispatch_count,
        has_latest=channel.has_latest,
        latest=channel.get_latest(None),
        payload_type=_type_name(channel.payload_type),
        description=channel.description,
    )
