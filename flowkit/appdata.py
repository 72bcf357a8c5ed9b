"""Application-wide shared values and an activity that reads or writes them."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from .activity import ActivityContext
from .coerce import DataType, to_string, to_type, to_type_enum

_VALUE = "value"
_OPERATIONS = ("get", "set")

_values: dict[str, Any] = {}
_values_lock = threading.Lock()


def get_value(name: str) -> Any:
    """Return the shared value named ``name``, or None if it is not set."""
    with _values_lock:
        return _values.get(name)


def set_value(name: str, value: Any) -> None:
    """Set the shared value named ``name``."""
    with _values_lock:
        _values[name] = value


def _lookup(name: str) -> tuple[Any, bool]:
    with _values_lock:
        return _values.get(name), name in _values


class AppDataActivity:
    """An activity that gets or sets a shared application value."""

    def __init__(self, name: str, op: str = "get", data_type: DataType = DataType.UNKNOWN) -> None:
        if not name:
            raise ValueError("name is required")
        if op not in _OPERATIONS:
            raise ValueError(f"op must be one of {', '.join(_OPERATIONS)}, got '{op}'")
        self.name = name
        self.op = op
        self.data_type = data_type

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> AppDataActivity:
        """Build the activity from ``name``, ``op`` and ``type`` settings."""
        name = to_string(settings.get("name"))
        op = to_string(settings.get("op")) or "get"
        type_name = to_string(settings.get("type"))
        data_type = to_type_enum(type_name) if type_name else DataType.UNKNOWN
        return cls(name, op, data_type)

    def _coerce(self, value: Any) -> Any:
        if self.data_type > DataType.ANY:
            return to_type(value, self.data_type)
        return value

    def eval(self, ctx: ActivityContext) -> bool:
        if self.op == "get":
            value, exists = _lookup(self.name)
            if exists:
                value = self._coerce(value)
            ctx.set_output(_VALUE, value)
        else:
            set_value(self.name, self._coerce(ctx.get_input(_VALUE)))
        return True