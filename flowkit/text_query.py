"""String functions that inspect, compare and convert text.

Positions and lengths are measured in bytes of the UTF-8 encoding.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from .coerce import CoercionError, to_float64, to_int, to_string

_logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MAX_PRECISION = 16
_ORDINALS = ("first", "second", "third")


def _text(value: Any, function_name: str, position: int = 0) -> str:
    try:
        return to_string(value)
    except CoercionError:
        raise ValueError(
            f"string.{function_name} function {_ORDINALS[position]} parameter "
            f"[{value!r}] must be string"
        ) from None


def _pair(a: Any, b: Any, function_name: str) -> tuple[str, str]:
    return _text(a, function_name, 0), _text(b, function_name, 1)


def _byte_offset(text: str, char_index: int) -> int:
    return len(text[:char_index].encode("utf-8"))


def concat(*args: Any) -> str:
    """Join two or more values as text."""
    if len(args) < 2:
        raise ValueError("concat function must have at least two arguments")
    parts = []
    for value in args:
        try:
            parts.append(to_string(value))
        except CoercionError:
            raise ValueError(f"concat function parameter [{value!r}] must be string.") from None
    return "".join(parts)


def contains(s: Any, substr: Any) -> bool:
    """Report whether ``substr`` occurs in ``s``."""
    text, sub = _pair(s, substr, "contains")
    return sub in text


def contains_any(s: Any, chars: Any) -> bool:
    """Report whether any character of ``chars`` occurs in ``s``."""
    text, wanted = _pair(s, chars, "containsAny")
    return any(ch in text for ch in wanted)


def count(s: Any, substr: Any) -> int:
    """Count non-overlapping occurrences of ``substr`` in ``s``.

    An empty ``substr`` yields the number of characters plus one.
    """
    if not isinstance(s, str) or not isinstance(substr, str):
        raise TypeError("string.count function parameters must be strings")
    return s.count(substr)


def ends_with(s: Any, suffix: Any) -> bool:
    """Report whether ``s`` ends with ``suffix``."""
    text, end = _pair(s, suffix, "endsWith")
    _logger.debug("Reports whether %r ends with %r", text, end)
    return text.endswith(end)


def starts_with(s: Any, prefix: Any) -> bool:
    """Report whether ``s`` begins with ``prefix``."""
    text, start = _pair(s, prefix, "startsWith")
    _logger.debug("Reports whether %r begins with %r", text, start)
    return text.startswith(start)


def equals(a: Any, b: Any) -> bool:
    """Report whether two values are equal as text."""
    first, second = _pair(a, b, "equals")
    return first == second


def _fold_equal(x: str, y: str) -> bool:
    return x == y or x.lower() == y.lower() or x.upper() == y.upper()


def equals_ignore_case(a: Any, b: Any) -> bool:
    """Report whether two values are equal as text, ignoring letter case."""
    first, second = _pair(a, b, "equalsIgnoreCase")
    if len(first) != len(second):
        return False
    return all(_fold_equal(x, y) for x, y in zip(first, second))


def _round_half_away(number: float) -> int:
    return int(number + math.copysign(0.5, number))


def to_float(*args: Any) -> float:
    """Convert a value to a float, optionally rounded to a number of decimals."""
    _logger.debug("Start Float64 function with parameters %r", args)
    if len(args) == 1:
        return to_float64(args[0])
    if len(args) == 2:
        try:
            number = to_float64(args[0])
        except CoercionError:
            raise ValueError(f"Invalid float type [{args[0]!r}]") from None
        try:
            precision = to_int(args[1])
        except CoercionError:
            raise ValueError(f"Float precision [{args[1]!r}] must be integer") from None
        precision = min(precision, _MAX_PRECISION)
        scale = 10.0**precision
        return float(_round_half_away(number * scale)) / scale
    raise ValueError("function arguments for float.float64 must be one or two")


def index(s: Any, substr: Any) -> int:
    """Return the byte position of the first ``substr`` in ``s``, or -1."""
    text, sub = _pair(s, substr, "index")
    return text.encode("utf-8").find(sub.encode("utf-8"))


def last_index(s: Any, substr: Any) -> int:
    """Return the byte position of the last ``substr`` in ``s``, or -1."""
    text, sub = _pair(s, substr, "lastIndex")
    return text.encode("utf-8").rfind(sub.encode("utf-8"))


def index_any(s: Any, chars: Any) -> int:
    """Return the byte position of the first character of ``s`` found in ``chars``, or -1."""
    text, wanted = _pair(s, chars, "indexAny")
    charset = set(wanted)
    for position, ch in enumerate(text):
        if ch in charset:
            return _byte_offset(text, position)
    return -1


def to_integer(s: Any) -> int:
    """Parse decimal text as a 64-bit integer."""
    text = _text(s, "integer")
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f'parsing "{text}": invalid syntax')
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f'parsing "{text}": value out of range')
    return number


def length(s: Any) -> int:
    """Return the length of the text in UTF-8 bytes."""
    return len(_text(s, "len").encode("utf-8"))


def match_regex(pattern: Any, s: Any) -> bool:
    """Report whether ``s`` contains a match of ``pattern``; a bad pattern never matches."""
    expression, text = _pair(pattern, s, "matchRegEx")
    try:
        return re.search(expression, text) is not None
    except re.error:
        return False