"""Channel — a named communication line with replay of its latest payload."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from ..errors import PayloadValidationError, SubscriberFault
from .levels import LogLevel

logger = logging.getLogger(__name__)

Callback = Callable[[Any], Any]
FaultHandler = Callable[[SubscriberFault], None]


class _NoPayload:
    """Marker for a channel that has never been dispatched on."""

    _instance: _NoPayload | None = None

    def __new__(cls) -> _NoPayload:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_PAYLOAD"


NO_PAYLOAD = _NoPayload()


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`Channel.subscribe`.

    Pass it back to :meth:`Channel.unsubscribe`, call :meth:`unsubscribe`
    on it, or use it as a context manager to scope the subscription.
    """

    channel: Channel
    callback: Callback

    @property
    def active(self) -> bool:
        return self.channel.is_subscribed(self)

    def unsubscribe(self) -> bool:
        return self.channel.unsubscribe(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()


class Channel:
    """A single named signal.

    Every channel memorizes its latest payload: a new subscriber is called
    with it immediately, before ``subscribe`` returns. Dispatch is
    synchronous and fans out in subscription order over a snapshot of the
    subscriber list, so callbacks may subscribe, unsubscribe or dispatch
    again without affecting the delivery in progress.
    """

    memorize = True

    def __init__(
        self,
        name: str,
        log_level: int = LogLevel.SILENT,
        payload_type: Any = None,
        description: str | None = None,
        fault_handler: FaultHandler | None = None,
    ) -> None:
        self._name = name
        self.log_level = int(log_level)
        self._original_log_level = int(log_level)
        self._payload_type = payload_type
        self._adapter: TypeAdapter | None = (
            TypeAdapter(payload_type) if payload_type is not None else None
        )
        self.description = description
        self._fault_handler = fault_handler
        self._subscriptions: list[Subscription] = []
        self._latest: Any = NO_PAYLOAD
        self._has_latest = False
        self._dispatch_count = 0
        self._lock = threading.Lock()
        self._tasks: set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return (
            f"Channel(name={self._name!r}, log_level={self.log_level}, "
            f"subscribers={self.subscriber_count})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def original_log_level(self) -> int:
        """Verbosity the channel was created with; restored on reset."""
        return self._original_log_level

    @property
    def payload_type(self) -> Any:
        return self._payload_type

    @property
    def has_latest(self) -> bool:
        return self._has_latest

    @property
    def dispatch_count(self) -> int:
        return self._dispatch_count

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @property
    def subscribers(self) -> list[Callback]:
        """Subscribed callbacks, in subscription order."""
        with self._lock:
            return [sub.callback for sub in self._subscriptions]

    def reset_log_level(self) -> None:
        self.log_level = self._original_log_level

    def get_latest(self, default: Any = NO_PAYLOAD) -> Any:
        """Return the latest dispatched payload, or ``default`` if there is none.

        A dispatched ``None``, ``""`` or ``0`` is returned as-is; only a
        channel that was never dispatched on yields ``default``.
        """
        with self._lock:
            return self._latest if self._has_latest else default

    def is_subscribed(self, handle: Subscription | Callback) -> bool:
        with self._lock:
            return self._find(handle) is not None

    def subscribe(self, callback: Callback) -> Subscription:
        """Subscribe ``callback`` and replay the latest payload to it.

        Subscribing an already subscribed callback returns its existing
        subscription without replaying again.
        """
        with self._lock:
            index = self._find(callback)
            if index is not None:
                return self._subscriptions[index]
            subscription = Subscription(self, callback)
            self._subscriptions.append(subscription)
            replay = self._has_latest
            latest = self._latest

        logger.debug("Subscribed %s to signal %s", _callback_name(callback), self._name)
        if replay:
            self._deliver(callback, latest, replay=True)
        return subscription

    def unsubscribe(self, handle: Subscription | Callback) -> bool:
        """Remove a subscription. Returns False if it was not subscribed."""
        with self._lock:
            index = self._find(handle)
            if index is None:
                return False
            del self._subscriptions[index]
        return True

    def dispatch(self, payload: Any = None) -> None:
        """Record ``payload`` as latest and deliver it to every subscriber."""
        self.validate(payload)

        with self._lock:
            self._latest = payload
            self._has_latest = True
            self._dispatch_count += 1
            snapshot = [sub.callback for sub in self._subscriptions]

        for callback in snapshot:
            self._deliver(callback, payload)

        if self.log_level >= LogLevel.PAYLOAD:
            logger.info("Signal dispatched: %s with payload %r", self._name, payload)
        elif self.log_level >= LogLevel.NAME:
            logger.info("Signal dispatched: %s", self._name)

    def validate(self, payload: Any) -> None:
        """Check ``payload`` against the declared payload type, if any.

        Raises:
            PayloadValidationError: the payload does not match.
        """
        if self._adapter is None:
            return
        try:
            self._adapter.validate_python(payload, strict=True)
        except ValidationError as e:
            raise PayloadValidationError(self._name, self._payload_type, e) from e

    def _find(self, handle: Subscription | Callback) -> int | None:
        for index, subscription in enumerate(self._subscriptions):
            if subscription is handle:
                return index
            if not isinstance(handle, Subscription) and _same_callback(
                subscription.callback, handle
            ):
                return index
        return None

    def _deliver(self, callback: Callback, payload: Any, replay: bool = False) -> None:
        try:
            result = callback(payload)
        except Exception as e:
            logger.exception(
                "Subscriber %s of signal %s raised", _callback_name(callback), self._name
            )
            self._report(SubscriberFault(self._name, callback, e, replay=replay))
            return

        if inspect.iscoroutine(result):
            self._schedule(callback, result, replay)

    def _schedule(self, callback: Callback, coro: Any, replay: bool) -> None:
        """Run a coroutine returned by an async subscriber on the running loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning(
                "Async subscriber %s of signal %s called outside an event loop; dropped",
                _callback_name(callback),
                self._name,
            )
            return

        task = loop.create_task(coro)
        self._tasks.add(task)

        def _done(t: asyncio.Task) -> None:
            self._tasks.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                logger.error(
                    "Async subscriber %s of signal %s raised",
                    _callback_name(callback),
                    self._name,
                    exc_info=exc,
                )
                self._report(SubscriberFault(self._name, callback, exc, replay=replay))

        task.add_done_callback(_done)

    def _report(self, fault: SubscriberFault) -> None:
        if self._fault_handler is None:
            return
        try:
            self._fault_handler(fault)
        except Exception:
            logger.exception("Fault handler for signal %s raised", self._name)


def _callback_name(callback: Callback) -> str:
    return getattr(callback, "__qualname__", repr(callback))


def _same_callback(a: Callback, b: Callback) -> bool:
    # A re-bound method matches its earlier binding; everything else by identity.
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return a is b
