"""Parsing of SQL statements with ``:name`` parameters into dialect-specific forms."""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from .sqldb import BindType, DbHelper

# Quoted text is skipped; a colon starts a parameter that runs up to the next space.
_SCAN_PATTERN = re.compile(r"\"[^\"]*\"?|'[^']*'?|:[^ ]*")


class StatementType(enum.Enum):
    """The kinds of data manipulation statement."""

    UNKNOWN = "unknown"
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


def to_statement_type(name: Any) -> StatementType:
    """Return the statement kind named by ``name`` (case-insensitive)."""
    try:
        statement_type = StatementType(str(name).lower())
    except ValueError:
        statement_type = StatementType.UNKNOWN
    if statement_type is StatementType.UNKNOWN:
        raise ValueError(f"unknown statement type: {name}")
    return statement_type


@dataclass(frozen=True)
class _Literal:
    text: str

    @property
    def placeholder(self) -> str:
        return self.text

    def to_value(self, helper: DbHelper, params: Mapping[str, Any]) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class _Param:
    name: str
    placeholder: str

    def to_value(self, helper: DbHelper, params: Mapping[str, Any]) -> str:
        return helper.to_sql_value(params.get(self.name))

    def __str__(self) -> str:
        return ":" + self.name


_Part = Union[_Literal, _Param]


def _placeholder(name: str, bind_type: BindType) -> str:
    if bind_type is BindType.AT:
        return "@" + name
    if bind_type is BindType.COLON:
        return ":" + name
    return "?"


def _parse(sql: str, bind_type: BindType) -> list[_Part]:
    parts: list[_Part] = []
    start = 0
    for match in _SCAN_PATTERN.finditer(sql):
        piece = match.group()
        if not piece.startswith(":"):
            continue
        parts.append(_Literal(sql[start:match.start()]))
        name = piece[1:]
        parts.append(_Param(name, _placeholder(name, bind_type)))
        start = match.end()
    if start < len(sql):
        parts.append(_Literal(sql[start:]))
    return parts


@dataclass(frozen=True)
class SQLStatement:
    """A parsed statement that can be rendered with values or as a prepared statement."""

    helper: DbHelper
    statement_type: StatementType
    parts: tuple[_Part, ...]
    prepared_sql: str
    placeholder_ids: dict[str, int] = field(default_factory=dict)

    def has_params(self) -> bool:
        return len(self.parts) > 1

    def __str__(self) -> str:
        return "".join(str(part) for part in self.parts)

    def _params(self) -> list[_Param]:
        return [part for part in self.parts if isinstance(part, _Param)]

    def to_statement_sql(self, params: Mapping[str, Any]) -> str:
        """Render the statement with every parameter written as a literal value."""
        return "".join(part.to_value(self.helper, params) for part in self.parts)

    def prepared_statement_args(
        self, params: Mapping[str, Any]
    ) -> dict[str, Any] | list[Any]:
        """Return the arguments for the prepared statement.

        Named placeholders take a mapping; positional ones take a list.
        """
        bind_type = self.helper.bind_type
        if bind_type in (BindType.AT, BindType.COLON):
            return dict(params)
        if bind_type is BindType.QUESTION:
            return [params[part.name] for part in self._params() if part.name in params]
        if bind_type is BindType.DOLLAR:
            ordered = sorted(self.placeholder_ids.items(), key=lambda item: item[1])
            return [params.get(name) for name, _ in ordered]
        return []


def parse_statement(helper: DbHelper, sql: str) -> SQLStatement:
    """Parse ``sql`` for the dialect described by ``helper``."""
    stripped = sql.strip()
    words = stripped.split()
    if not words:
        raise ValueError(f"invalid sql '{stripped}'")
    statement_type = to_statement_type(words[0])
    parts = tuple(_parse(stripped, helper.bind_type))

    placeholder_ids: dict[str, int] = {}
    if helper.bind_type is BindType.DOLLAR:
        for part in parts:
            if isinstance(part, _Param):
                placeholder_ids.setdefault(part.name, len(placeholder_ids) + 1)

    prepared = "".join(part.placeholder for part in parts)
    return SQLStatement(helper, statement_type, parts, prepared, placeholder_ids)