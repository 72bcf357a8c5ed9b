"""Activity execution context, mappings and the noop, error and log activities."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .coerce import CoercionError, to_bool, to_string

_LOGGER_NAME = "flowkit.activity"
_EXPR_PREFIX = "="
_SCOPE_PREFIX = "$."


class ActivityError(Exception):
    """An error raised by an activity, carrying an optional code and data."""

    def __init__(self, message: str, code: str = "", data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        return self.message


class Scope:
    """Named values visible to a running activity, with an optional parent."""

    def __init__(self, values: Mapping[str, Any] | None = None, parent: Scope | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._parent = parent

    def get_value(self, name: str) -> Any:
        """Return the value named ``name``, or None if it is not set."""
        if name in self._values:
            return self._values[name]
        if self._parent is not None:
            return self._parent.get_value(name)
        return None

    def set_value(self, name: str, value: Any) -> None:
        """Set the value named ``name``."""
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values or (self._parent is not None and name in self._parent)

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of the values set in this scope."""
        return dict(self._values)


@dataclass
class ActivityHost:
    """The flow or action that runs activities and receives their replies."""

    id: str = ""
    name: str = ""
    ref: str = ""
    scope: Scope = field(default_factory=Scope)
    reply_data: dict[str, Any] | None = None
    reply_error: Exception | None = None
    return_data: dict[str, Any] | None = None
    return_error: Exception | None = None

    def reply(self, data: dict[str, Any] | None, error: Exception | None) -> None:
        """Record a reply to the trigger that started the host."""
        self.reply_data = data
        self.reply_error = error

    def return_result(self, data: dict[str, Any] | None, error: Exception | None) -> None:
        """Record the value the host returns."""
        self.return_data = data
        self.return_error = error


def _default_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


@dataclass
class ActivityContext:
    """Inputs, outputs and surroundings of one activity run."""

    name: str = ""
    host: ActivityHost = field(default_factory=ActivityHost)
    inputs: dict[str, Any] = field(default_factory=dict)
    outputs: dict[str, Any] = field(default_factory=dict)
    logger: logging.Logger = field(default_factory=_default_logger)

    def get_input(self, name: str) -> Any:
        return self.inputs.get(name)

    def set_input(self, name: str, value: Any) -> None:
        self.inputs[name] = value

    def get_output(self, name: str) -> Any:
        return self.outputs.get(name)

    def set_output(self, name: str, value: Any) -> None:
        self.outputs[name] = value


def _parse_reference(expression: str) -> list[str]:
    body = expression[len(_EXPR_PREFIX):].strip()
    if not body.startswith(_SCOPE_PREFIX):
        raise ValueError(f"unsupported mapping expression: {expression}")
    path = body[len(_SCOPE_PREFIX):].split(".")
    if any(not segment for segment in path):
        raise ValueError(f"invalid mapping expression: {expression}")
    return path


def _resolver(expression: Any) -> Callable[[Scope], Any]:
    if isinstance(expression, str) and expression.startswith(_EXPR_PREFIX):
        path = _parse_reference(expression)

        def resolve(scope: Scope) -> Any:
            current = scope.get_value(path[0])
            for segment in path[1:]:
                if current is None:
                    return None
                if not isinstance(current, Mapping):
                    raise ValueError(f"cannot resolve '{segment}' in {expression}: not an object")
                current = current.get(segment)
            return current

        return resolve

    return lambda _scope: copy.deepcopy(expression)


class Mapper:
    """Produces named values from literals and ``=$.name`` scope references."""

    def __init__(self, mappings: Mapping[str, Any]) -> None:
        if not isinstance(mappings, Mapping):
            raise TypeError("mappings must be a mapping of target names to values")
        self._resolvers = {target: _resolver(expr) for target, expr in mappings.items()}

    def apply(self, scope: Scope) -> dict[str, Any]:
        """Evaluate every mapping against ``scope``."""
        return {target: resolve(scope) for target, resolve in self._resolvers.items()}


def new_mapper(mappings: Mapping[str, Any] | None) -> Mapper | None:
    """Return a mapper for ``mappings``, or None when there are none."""
    if not mappings:
        return None
    return Mapper(mappings)


def _lenient(convert: Callable[[Any], Any], value: Any, fallback: Any) -> Any:
    try:
        return convert(value)
    except CoercionError:
        return fallback


class NoopActivity:
    """An activity that does nothing."""

    def eval(self, ctx: ActivityContext) -> bool:
        ctx.logger.debug("Performing No-Op Activity")
        return True


class ErrorActivity:
    """An activity that raises an error with the given message and data."""

    def eval(self, ctx: ActivityContext) -> bool:
        message = to_string(ctx.get_input("message"))
        data = ctx.get_input("data")
        ctx.logger.debug("Message :'%s', Data: '%r'", message, data)
        raise ActivityError(message, "", data)


class LogActivity:
    """An activity that logs a message, optionally with host details."""

    def eval(self, ctx: ActivityContext) -> bool:
        message = _lenient(to_string, ctx.get_input("message"), "")
        add_details = _lenient(to_bool, ctx.get_input("addDetails"), False)
        if add_details:
            message = (
                f"'{message}' - HostID [{ctx.host.id}], HostName [{ctx.host.name}], "
                f"Activity [{ctx.name}]"
            )
        ctx.logger.info(message)
        return True