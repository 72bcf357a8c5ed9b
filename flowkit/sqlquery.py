"""An activity that runs a parameterised SELECT statement against a database."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping
from contextlib import closing
from typing import Any, Callable

from .activity import ActivityContext
from .coerce import to_bool, to_object, to_string
from .sqldb import DbHelper, get_db_helper
from .sqlstatement import SQLStatement, StatementType, parse_statement

_logger = logging.getLogger(__name__)

_OUTPUT_RESULTS = "results"
_REQUIRED = ("dbType", "driverName", "dataSourceName", "query")


class SqlQueryActivity:
    """Runs a SELECT statement with the ``params`` input and outputs its rows as ``results``.

    Rows are lists of column values, or dictionaries keyed by column name when
    labelled results are asked for.
    """

    def __init__(
        self,
        connection: Any,
        helper: DbHelper,
        statement: SQLStatement,
        *,
        prepared: bool = True,
        labeled_results: bool = False,
    ) -> None:
        if statement.statement_type is not StatementType.SELECT:
            raise ValueError("only select statement is supported")
        self._connection = connection
        self.helper = helper
        self.statement = statement
        self.prepared = prepared
        self.labeled_results = labeled_results

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any],
        connect: Callable[[str], Any] | None = None,
    ) -> SqlQueryActivity:
        """Build the activity; ``connect`` opens a DB-API connection from the data source name."""
        for key in _REQUIRED:
            if not to_string(settings.get(key)):
                raise ValueError(f"{key} is required")
        db_type = to_string(settings["dbType"])
        helper = get_db_helper(db_type)
        _logger.debug("DB: '%s'", db_type)

        statement = parse_statement(helper, to_string(settings["query"]))
        if statement.statement_type is not StatementType.SELECT:
            raise ValueError("only select statement is supported")

        prepared = not to_bool(settings.get("disablePrepared"))
        if prepared:
            _logger.debug("Using PreparedStatement: %s", statement.prepared_sql)

        opener = connect or sqlite3.connect
        connection = opener(to_string(settings["dataSourceName"]))
        return cls(
            connection,
            helper,
            statement,
            prepared=prepared,
            labeled_results=to_bool(settings.get("labeledResults")),
        )

    def eval(self, ctx: ActivityContext) -> bool:
        params = to_object(ctx.get_input("params"))
        ctx.set_output(_OUTPUT_RESULTS, self._select(params))
        return True

    def _select(self, params: Mapping[str, Any]) -> list[Any]:
        with closing(self._connection.cursor()) as cursor:
            if self.prepared:
                cursor.execute(
                    self.statement.prepared_sql,
                    self.statement.prepared_statement_args(params),
                )
            else:
                cursor.execute(self.statement.to_statement_sql(params))
            rows = cursor.fetchall()
            if self.labeled_results:
                columns = [column[0] for column in cursor.description or ()]
                return [dict(zip(columns, row)) for row in rows]
            return [list(row) for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        _logger.debug("cleaning up SQL Query activity")
        self._connection.close()

    def __enter__(self) -> SqlQueryActivity:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()