"""Database kinds and how each one writes parameter placeholders and literal values."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .coerce import CoercionError, to_string


class DbType(enum.Enum):
    """The supported database kinds."""

    UNKNOWN = "unknown"
    MYSQL = "mysql"
    ORACLE = "oracle"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"


class BindType(enum.Enum):
    """How a database marks parameters in a prepared statement."""

    UNKNOWN = enum.auto()
    AT = enum.auto()
    COLON = enum.auto()
    DOLLAR = enum.auto()
    QUESTION = enum.auto()


def to_db_type(name: Any) -> DbType:
    """Return the database kind named by ``name`` (case-insensitive)."""
    key = str(name).lower()
    try:
        db_type = DbType(key)
    except ValueError:
        db_type = DbType.UNKNOWN
    if db_type is DbType.UNKNOWN:
        raise ValueError(f"unknown type: {name}")
    return db_type


def _text(value: Any) -> str:
    try:
        return to_string(value)
    except CoercionError:
        return ""


@dataclass(frozen=True)
class DbHelper:
    """The SQL dialect details of one database kind."""

    db_type: DbType
    bind_type: BindType
    true_literal: str = "true"
    false_literal: str = "false"

    def to_sql_value(self, value: Any) -> str:
        """Write ``value`` as an SQL literal: numbers bare, booleans per dialect, the rest quoted."""
        if isinstance(value, bool):
            return self.true_literal if value else self.false_literal
        text = _text(value)
        if isinstance(value, (int, float)):
            return text
        return f"'{text}'"


_HELPERS = {
    DbType.MYSQL: DbHelper(DbType.MYSQL, BindType.QUESTION),
    DbType.ORACLE: DbHelper(DbType.ORACLE, BindType.COLON, "1", "0"),
    DbType.POSTGRES: DbHelper(DbType.POSTGRES, BindType.DOLLAR, "TRUE", "FALSE"),
    DbType.SQLITE: DbHelper(DbType.SQLITE, BindType.QUESTION, "1", "0"),
    DbType.SQLSERVER: DbHelper(DbType.SQLSERVER, BindType.AT, "TRUE", "FALSE"),
}


def get_db_helper(name: Any) -> DbHelper:
    """Return the dialect helper for the database kind named by ``name``."""
    db_type = to_db_type(name)
    try:
        return _HELPERS[db_type]
    except KeyError:
        raise ValueError(f"unsupported db: {name}") from None