"""JSONPath lookups over decoded JSON data."""

from __future__ import annotations

import operator
import re
from collections.abc import Mapping
from typing import Any

_QUOTES = "'\""
_CONDITION = re.compile(r"(.+?)\s*(==|!=|<=|>=|=~|<|>)\s*(.+)", re.DOTALL)
_OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def path(expression: str, data: Any) -> Any:
    """Return what the JSONPath ``expression`` selects from ``data``."""
    if not isinstance(expression, str):
        raise TypeError("path expression must be a string")
    return _evaluate(expression, data, data)


def _evaluate(expression: str, current: Any, root: Any) -> Any:
    tokens = _split_path(expression.strip())
    head, selectors = _split_selectors(tokens[0])
    if head == "$":
        value = root
    elif head == "@":
        value = current
    else:
        raise ValueError(f"path must start with '$' or '@': {expression!r}")
    value = _apply(value, selectors, root)
    for token in tokens[1:]:
        name, selectors = _split_selectors(token)
        if name:
            value = _get_key(value, name)
        value = _apply(value, selectors, root)
    return value


def _split_path(expression: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for ch in expression:
        if quote:
            if ch == quote:
                quote = None
        elif ch in _QUOTES and depth:
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth < 0:
                raise ValueError(f"unbalanced brackets in {expression!r}")
        elif ch == "." and depth == 0:
            tokens.append("".join(current))
            current = []
            continue
        current.append(ch)
    if quote or depth:
        raise ValueError(f"unbalanced brackets or quotes in {expression!r}")
    tokens.append("".join(current))
    if any(not token.strip() for token in tokens[1:]):
        raise ValueError(f"empty path segment in {expression!r}")
    return [token.strip() for token in tokens]


def _split_selectors(token: str) -> tuple[str, list[str]]:
    start = token.find("[")
    if start < 0:
        return token, []
    name, rest = token[:start].strip(), token[start:]
    selectors: list[str] = []
    depth = 0
    begin = 0
    quote: str | None = None
    for pos, ch in enumerate(rest):
        if quote:
            if ch == quote:
                quote = None
        elif depth == 0:
            if ch.isspace():
                continue
            if ch != "[":
                raise ValueError(f"unexpected character {ch!r} in path segment {token!r}")
            depth = 1
            begin = pos + 1
        elif ch in _QUOTES:
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                selectors.append(rest[begin:pos].strip())
    return name, selectors


def _apply(value: Any, selectors: list[str], root: Any) -> Any:
    for selector in selectors:
        value = _select(value, selector, root)
    return value


def _members(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"cannot iterate over a value of type {type(value).__name__}")


def _as_list(value: Any) -> list[Any] | tuple[Any, ...]:
    if isinstance(value, (list, tuple)):
        return value
    raise ValueError(f"value of type {type(value).__name__} is not an array")


def _get_key(value: Any, key: str) -> Any:
    if key == "*":
        return _members(value)
    if isinstance(value, Mapping):
        if key not in value:
            raise KeyError(f"key error: {key} not found in object")
        return value[key]
    if isinstance(value, (list, tuple)):
        return [item[key] for item in value if isinstance(item, Mapping) and key in item]
    raise KeyError(f"key error: {key} not found in value of type {type(value).__name__}")


def _parse_index(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"invalid array index: {text!r}") from None


def _at(value: Any, index: int) -> Any:
    items = _as_list(value)
    try:
        return items[index]
    except IndexError:
        raise IndexError(f"index out of range: {index}, length {len(items)}") from None


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    raise ValueError(f"invalid quoted string: {text!r}")


def _select(value: Any, selector: str, root: Any) -> Any:
    if not selector:
        raise ValueError("empty selector")
    if selector.startswith("?(") and selector.endswith(")"):
        condition = selector[2:-1]
        return [item for item in _members(value) if _matches(item, condition, root)]
    if selector == "*":
        return _members(value)
    if selector[0] in _QUOTES:
        return _get_key(value, _unquote(selector))
    if ":" in selector:
        parts = selector.split(":")
        if len(parts) > 3:
            raise ValueError(f"invalid slice: {selector!r}")
        bounds = [_parse_index(part) if part.strip() else None for part in parts]
        return list(_as_list(value)[slice(*bounds)])
    if "," in selector:
        return [_at(value, _parse_index(part)) for part in selector.split(",")]
    return _at(value, _parse_index(selector))


def _matches(item: Any, condition: str, root: Any) -> bool:
    condition = condition.strip()
    match = _CONDITION.fullmatch(condition)
    if match is None:
        try:
            _evaluate(condition, item, root)
        except LookupError:
            return False
        return True
    left_text, op, right_text = match.groups()
    try:
        left = _operand(left_text, item, root)
        if op == "=~":
            return isinstance(left, str) and re.search(_pattern(right_text), left) is not None
        right = _operand(right_text, item, root)
    except LookupError:
        return False
    return _compare(left, op, right)


def _operand(text: str, item: Any, root: Any) -> Any:
    text = text.strip()
    if text.startswith(("@", "$")):
        return _evaluate(text, item, root)
    return _literal(text)


def _literal(text: str) -> Any:
    if text and text[0] in _QUOTES:
        return _unquote(text)
    keywords = {"true": True, "false": False, "null": None}
    if text in keywords:
        return keywords[text]
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid literal in filter: {text!r}") from None


def _pattern(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == "/" and text[-1] == "/":
        return text[1:-1]
    if text and text[0] in _QUOTES:
        return _unquote(text)
    return text


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare(left: Any, op: str, right: Any) -> bool:
    if _is_number(left) and _is_number(right):
        left, right = float(left), float(right)
    elif op not in ("==", "!=") and not (isinstance(left, str) and isinstance(right, str)):
        return False
    return bool(_OPERATORS[op](left, right))