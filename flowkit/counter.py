"""Named thread-safe counters and an activity that operates on them."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Callable

from .activity import ActivityContext
from .coerce import to_string

_OUTPUT_VALUE = "value"
_OPERATIONS = ("get", "increment", "reset")


class Counter:
    """A counter that can be read, incremented and reset from any thread."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> int:
        with self._lock:
            self._value = 0
            return 0


_counters: dict[str, Counter] = {}
_counters_lock = threading.Lock()


def get_counter(name: str) -> Counter:
    """Return the counter named ``name``, creating it if needed."""
    with _counters_lock:
        return _counters.setdefault(name, Counter())


class CounterActivity:
    """An activity that gets, increments or resets a named counter."""

    def __init__(self, counter_name: str, op: str = "get") -> None:
        if not counter_name:
            raise ValueError("counterName is required")
        if op not in _OPERATIONS:
            raise ValueError(f"op must be one of {', '.join(_OPERATIONS)}, got '{op}'")
        self.counter_name = counter_name
        self.op = op
        counter = get_counter(counter_name)
        self._invoke: Callable[[], int] = getattr(counter, op)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> CounterActivity:
        """Build the activity from ``counterName`` and ``op`` settings."""
        name = to_string(settings.get("counterName"))
        op = to_string(settings.get("op")) or "get"
        return cls(name, op)

    def eval(self, ctx: ActivityContext) -> bool:
        ctx.set_output(_OUTPUT_VALUE, int(self._invoke()))
        return True