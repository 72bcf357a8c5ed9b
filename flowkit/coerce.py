"""Type coercion for values passed between flow activities and functions."""

from __future__ import annotations

import base64
import enum
import json
import math
import re
import struct
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable


class CoercionError(ValueError):
    """Raised when a value cannot be converted to the requested type."""


class DataType(enum.IntEnum):
    """The data types a value can be coerced to."""

    UNKNOWN = 0
    ANY = 1
    STRING = 2
    INT = 3
    INT32 = 4
    INT64 = 5
    FLOAT32 = 6
    FLOAT64 = 7
    BOOL = 8
    OBJECT = 9
    BYTES = 10
    PARAMS = 11
    ARRAY = 12
    MAP = 13


_TYPE_NAMES = {
    "any": DataType.ANY,
    "string": DataType.STRING,
    "int": DataType.INT,
    "integer": DataType.INT,
    "int32": DataType.INT32,
    "int64": DataType.INT64,
    "long": DataType.INT64,
    "float32": DataType.FLOAT32,
    "float64": DataType.FLOAT64,
    "double": DataType.FLOAT64,
    "number": DataType.FLOAT64,
    "bool": DataType.BOOL,
    "boolean": DataType.BOOL,
    "object": DataType.OBJECT,
    "bytes": DataType.BYTES,
    "params": DataType.PARAMS,
    "array": DataType.ARRAY,
    "map": DataType.MAP,
}

_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)
_INT_PATTERN = re.compile(r"[+-]?\d+")
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def to_type_enum(name: Any) -> DataType:
    """Return the data type named by ``name`` (case-insensitive)."""
    if isinstance(name, DataType):
        return name
    key = str(name).strip().lower()
    try:
        return _TYPE_NAMES[key]
    except KeyError:
        raise CoercionError(f"unknown type: {name}") from None


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"value of type {type(value).__name__} is not serialisable")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _decode(value: bytes | bytearray) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CoercionError(f"unable to decode bytes as text: {exc}") from exc


def to_string(value: Any) -> str:
    """Coerce ``value`` to a string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (bytes, bytearray)):
        return _decode(value)
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), default=_json_default)
        except (TypeError, ValueError) as exc:
            raise CoercionError(f"unable to coerce {value!r} to string: {exc}") from exc
    return str(value)


def _parse_float_text(text: str) -> float:
    stripped = text.strip()
    if not stripped or "_" in stripped:
        raise CoercionError(f"unable to coerce {text!r} to float")
    try:
        return float(stripped)
    except ValueError:
        raise CoercionError(f"unable to coerce {text!r} to float") from None


def _parse_int_text(text: str) -> int:
    stripped = text.strip()
    if _INT_PATTERN.fullmatch(stripped):
        return int(stripped)
    try:
        number = _parse_float_text(stripped)
    except CoercionError:
        raise CoercionError(f"unable to coerce {text!r} to int") from None
    return _float_to_int(number)


def _float_to_int(value: float) -> int:
    if math.isnan(value) or math.isinf(value):
        raise CoercionError(f"unable to coerce {value!r} to int")
    return int(value)


def to_int(value: Any) -> int:
    """Coerce ``value`` to an integer; floats are truncated."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _float_to_int(value)
    if isinstance(value, str):
        return _parse_int_text(value)
    if isinstance(value, (bytes, bytearray)):
        return _parse_int_text(_decode(value))
    raise CoercionError(f"unable to coerce {value!r} to int")


def _ranged(value: int, bounds: tuple[int, int], label: str) -> int:
    low, high = bounds
    if not low <= value <= high:
        raise CoercionError(f"value {value} out of range for {label}")
    return value


def to_int32(value: Any) -> int:
    """Coerce ``value`` to an integer that fits in 32 bits."""
    return _ranged(to_int(value), _INT32_RANGE, "int32")


def to_int64(value: Any) -> int:
    """Coerce ``value`` to an integer that fits in 64 bits."""
    return _ranged(to_int(value), _INT64_RANGE, "int64")


def to_float64(value: Any) -> float:
    """Coerce ``value`` to a float."""
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        return _parse_float_text(value)
    if isinstance(value, (bytes, bytearray)):
        return _parse_float_text(_decode(value))
    raise CoercionError(f"unable to coerce {value!r} to float")


def to_float32(value: Any) -> float:
    """Coerce ``value`` to a float rounded to single precision."""
    number = to_float64(value)
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except (OverflowError, struct.error) as exc:
        raise CoercionError(f"value {number!r} out of range for float32") from exc


def to_bool(value: Any) -> bool:
    """Coerce ``value`` to a boolean."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (bytes, bytearray)):
        value = _decode(value)
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
    raise CoercionError(f"unable to coerce {value!r} to bool")


def to_bytes(value: Any) -> bytes:
    """Coerce ``value`` to bytes; text is encoded as UTF-8."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return to_string(value).encode("utf-8")


def _load_json(text: str, expected: type, label: str) -> Any:
    try:
        loaded = json.loads(text)
    except ValueError as exc:
        raise CoercionError(f"unable to coerce {text!r} to {label}: {exc}") from exc
    if not isinstance(loaded, expected):
        raise CoercionError(f"unable to coerce {text!r} to {label}")
    return loaded


def to_object(value: Any) -> dict[str, Any]:
    """Coerce ``value`` to a dictionary with string keys."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {k if isinstance(k, str) else to_string(k): v for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        value = _decode(value)
    if isinstance(value, str):
        if not value.strip():
            return {}
        return _load_json(value, dict, "object")
    raise CoercionError(f"unable to coerce {value!r} to object")


def to_params(value: Any) -> dict[str, str]:
    """Coerce ``value`` to a dictionary of string keys and string values."""
    return {key: to_string(item) for key, item in to_object(value).items()}


def to_array(value: Any) -> list[Any]:
    """Coerce ``value`` to a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        if not value.strip():
            return []
        return _load_json(value, list, "array")
    raise CoercionError(f"unable to coerce {value!r} to array")


_CONVERTERS: dict[DataType, Callable[[Any], Any]] = {
    DataType.STRING: to_string,
    DataType.INT: to_int,
    DataType.INT32: to_int32,
    DataType.INT64: to_int64,
    DataType.FLOAT32: to_float32,
    DataType.FLOAT64: to_float64,
    DataType.BOOL: to_bool,
    DataType.OBJECT: to_object,
    DataType.BYTES: to_bytes,
    DataType.PARAMS: to_params,
    DataType.ARRAY: to_array,
    DataType.MAP: to_object,
}


def to_type(value: Any, data_type: DataType | str) -> Any:
    """Coerce ``value`` to ``data_type``; ``ANY`` and ``UNKNOWN`` leave it as is."""
    converter = _CONVERTERS.get(to_type_enum(data_type))
    return value if converter is None else converter(value)


def coerce_to_type(value: Any, type_name: Any) -> Any:
    """Coerce ``value`` to the type named by the string ``type_name``."""
    if not isinstance(type_name, str):
        raise CoercionError("second param must be a string")
    return to_type(value, to_type_enum(type_name))