"""Named in-process channels and an activity that publishes to them."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable

from .activity import ActivityContext
from .coerce import to_string

_logger = logging.getLogger(__name__)
_STOP = object()


class Channel:
    """A named buffered queue whose messages are handed to callbacks."""

    def __init__(self, name: str, buffer_size: int = 0) -> None:
        if buffer_size < 0:
            raise ValueError("buffer size must not be negative")
        self.name = name
        self.buffer_size = buffer_size
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=buffer_size)
        self._callbacks: list[Callable[[Any], None]] = []
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    def register_callback(self, callback: Callable[[Any], None]) -> None:
        """Add a callback that receives every message on the channel."""
        with self._lock:
            self._callbacks.append(callback)

    def publish(self, value: Any) -> None:
        """Put ``value`` on the channel, waiting for room if it is full."""
        self._queue.put(value)

    def publish_no_wait(self, value: Any) -> bool:
        """Put ``value`` on the channel if there is room; return whether it was."""
        try:
            self._queue.put_nowait(value)
        except queue.Full:
            return False
        return True

    def start(self) -> None:
        """Start delivering messages to the callbacks."""
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(
                target=self._run, name=f"channel-{self.name}", daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        """Stop delivering messages once those already queued are handled."""
        with self._lock:
            thread, self._thread = self._thread, None
        if thread is None:
            return
        self._queue.put(_STOP)
        thread.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            with self._lock:
                callbacks = list(self._callbacks)
            for callback in callbacks:
                try:
                    callback(item)
                except Exception:
                    _logger.exception("callback on channel '%s' failed", self.name)


_channels: dict[str, Channel] = {}
_channels_lock = threading.Lock()


def create_channel(name: str, buffer_size: int) -> Channel:
    """Create and register a channel; the name must be new."""
    if not name:
        raise ValueError("channel name must be specified")
    with _channels_lock:
        if name in _channels:
            raise ValueError(f"channel '{name}' already exists")
        channel = Channel(name, buffer_size)
        _channels[name] = channel
        return channel


def get_channel(name: str) -> Channel | None:
    """Return the registered channel named ``name``, or None."""
    with _channels_lock:
        return _channels.get(name)


def start_channels() -> None:
    """Start every registered channel."""
    with _channels_lock:
        channels = list(_channels.values())
    for channel in channels:
        channel.start()


def stop_channels() -> None:
    """Stop every registered channel."""
    with _channels_lock:
        channels = list(_channels.values())
    for channel in channels:
        channel.stop()


class ChannelActivity:
    """An activity that publishes its ``data`` input on a named channel."""

    def eval(self, ctx: ActivityContext) -> bool:
        name = to_string(ctx.get_input("channel"))
        data = ctx.get_input("data")
        if not name:
            raise ValueError("channel name must be specified")
        channel = get_channel(name)
        if channel is None:
            raise ValueError(f"channel '{name}' not registered with engine")
        channel.publish(data)
        ctx.logger.debug("Published on '%s' value: %r", name, data)
        return True