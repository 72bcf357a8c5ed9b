"""String functions that build new text from existing text.

Positions and lengths are measured in bytes of the UTF-8 encoding.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .coerce import CoercionError, to_int, to_string

_logger = logging.getLogger(__name__)

_ORDINALS = ("first", "second", "third", "last")
_NAME_CHARS = re.compile(r"[A-Za-z0-9_]+")
_SPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _text(value: Any, function_name: str, position: int = 0) -> str:
    try:
        return to_string(value)
    except CoercionError:
        raise ValueError(
            f"string.{function_name} function {_ORDINALS[position]} parameter "
            f"[{value!r}] must be string"
        ) from None


def _number(value: Any, function_name: str, position: int, label: str = "int") -> int:
    try:
        return to_int(value)
    except CoercionError:
        raise ValueError(
            f"string.{function_name} function {_ORDINALS[position]} parameter "
            f"[{value!r}] must be {label}"
        ) from None


def repeat(s: Any, count: Any) -> str:
    """Return ``s`` repeated ``count`` times."""
    text = _text(s, "repeat")
    times = _number(count, "repeat", 1)
    if times < 0:
        raise ValueError("negative repeat count")
    return text * times


def replace(s: Any, old: Any, new: Any, n: Any) -> str:
    """Replace the first ``n`` occurrences of ``old``; a negative ``n`` replaces all."""
    text = _text(s, "replace", 0)
    target = _text(old, "replace", 1)
    replacement = _text(new, "replace", 2)
    limit = _number(n, "replace", 3)
    return text.replace(target, replacement, -1 if limit < 0 else limit)


def replace_all(s: Any, old: Any, new: Any) -> str:
    """Replace every occurrence of ``old`` in ``s`` with ``new``."""
    text = _text(s, "replaceAll", 0)
    target = _text(old, "replaceAll", 1)
    replacement = _text(new, "replaceAll", 2)
    return text.replace(target, replacement)


def _group_value(match: re.Match[str], name: str) -> str:
    try:
        key: int | str = int(name) if name.isdigit() else name
        value = match.group(key)
    except (IndexError, error_types()):
        return ""
    return value or ""


def error_types() -> type[Exception]:
    return re.error


def _expand(template: str, match: re.Match[str]) -> str:
    """Expand ``$n``, ``${name}`` and ``$$`` in ``template`` for ``match``."""
    out: list[str] = []
    pos = 0
    while True:
        dollar = template.find("$", pos)
        if dollar < 0:
            out.append(template[pos:])
            return "".join(out)
        out.append(template[pos:dollar])
        rest = dollar + 1
        if template.startswith("$", rest):
            out.append("$")
            pos = rest + 1
            continue
        name = ""
        end = rest
        if template.startswith("{", rest):
            close = template.find("}", rest + 1)
            if close > rest + 1 and _NAME_CHARS.fullmatch(template[rest + 1:close]):
                name = template[rest + 1:close]
                end = close + 1
        else:
            found = _NAME_CHARS.match(template, rest)
            if found:
                name = found.group()
                end = found.end()
        if not name:
            out.append("$")
            pos = rest
            continue
        out.append(_group_value(match, name))
        pos = end


def replace_regex(pattern: Any, s: Any, replacement: Any) -> str:
    """Replace every match of ``pattern`` in ``s``; ``$1`` and ``${name}`` expand groups.

    An empty match right after a previous match is not replaced.
    """
    expression = _text(pattern, "replaceRegEx", 0)
    text = _text(s, "replaceRegEx", 1)
    template = _text(replacement, "replaceRegEx", 2)
    try:
        compiled = re.compile(expression)
    except re.error as exc:
        raise ValueError(f"invalid regular expression {expression!r}: {exc}") from exc
    out: list[str] = []
    last_end = 0
    previous_end: int | None = None
    for match in compiled.finditer(text):
        if match.start() == match.end() == previous_end:
            continue
        out.append(text[last_end:match.start()])
        out.append(_expand(template, match))
        last_end = match.end()
        previous_end = match.end()
    out.append(text[last_end:])
    return "".join(out)


def split(s: Any, sep: Any) -> list[str]:
    """Split ``s`` around every ``sep``; an empty ``sep`` splits into characters."""
    text = _text(s, "split", 0)
    separator = _text(sep, "split", 1)
    if not separator:
        return list(text)
    return text.split(separator)


def substring(s: Any, start: Any, length: Any) -> str:
    """Return ``length`` bytes of ``s`` from byte ``start``; a length of -1 means to the end."""
    text = _text(s, "substring", 0)
    begin = _number(start, "substring", 1, "integer")
    size = _number(length, "substring", 2, "integer")
    raw = text.encode("utf-8")
    if begin < 0 or begin > len(raw):
        raise IndexError(f"slice bounds out of range [{begin}:{len(raw)}]")
    if size == -1:
        return raw[begin:].decode("utf-8", errors="replace")
    if begin + size > len(raw):
        raise ValueError("string length exceeded")
    if size < 0:
        raise IndexError(f"slice bounds out of range [{begin}:{begin + size}]")
    return raw[begin:begin + size].decode("utf-8", errors="replace")


def substring_after(s: Any, sep: Any) -> str:
    """Return the part of ``s`` after the first ``sep``, or ``s`` if there is none."""
    text = _text(s, "substringAfter", 0)
    marker = _text(sep, "substringAfter", 1)
    _logger.debug("Start substringAfter with string %r after %r", text, marker)
    position = text.find(marker)
    if position < 0:
        return text
    return text[position + len(marker):]


def substring_before(s: Any, sep: Any) -> str:
    """Return the part of ``s`` before the first ``sep``, or ``s`` if there is none."""
    text = _text(s, "substringBefore", 0)
    marker = _text(sep, "substringBefore", 1)
    _logger.debug("Start substringBefore with string %r before %r", text, marker)
    position = text.find(marker)
    if position < 0:
        return text
    return text[:position]


def _map_chars(text: str, convert: Any) -> str:
    result = []
    for ch in text:
        mapped = convert(ch)
        result.append(mapped if len(mapped) == 1 else ch)
    return "".join(result)


def to_lower(s: Any) -> str:
    """Return ``s`` with every letter mapped to lower case."""
    return _map_chars(_text(s, "toLower"), str.lower)


def to_upper(s: Any) -> str:
    """Return ``s`` with every letter mapped to upper case."""
    return _map_chars(_text(s, "toUpper"), str.upper)


def trim(s: Any, *args: Any) -> str:
    """Strip characters in a cutset from both ends, or white space if none is given."""
    text = _text(s, "trim", 0)
    if args:
        return text.strip(_text(args[0], "trim", 1))
    return text.strip(_SPACE)


def trim_left(s: Any, cutset: Any) -> str:
    """Strip leading characters found in ``cutset``."""
    text = _text(s, "trimLeft", 0)
    return text.lstrip(_text(cutset, "trimLeft", 1))


def trim_right(s: Any, cutset: Any) -> str:
    """Strip trailing characters found in ``cutset``."""
    text = _text(s, "trimRight", 0)
    return text.rstrip(_text(cutset, "trimRight", 1))


def trim_prefix(s: Any, prefix: Any) -> str:
    """Remove ``prefix`` from the start of ``s`` if it is there."""
    text = _text(s, "trimPrefix", 0)
    return text.removeprefix(_text(prefix, "trimPrefix", 1))


def trim_suffix(s: Any, suffix: Any) -> str:
    """Remove ``suffix`` from the end of ``s`` if it is there."""
    text = _text(s, "trimSuffix", 0)
    return text.removesuffix(_text(suffix, "trimSuffix", 1))