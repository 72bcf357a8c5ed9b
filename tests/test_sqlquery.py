import logging
import sqlite3

import pytest

from flowkit.sqlquery import SqlQueryActivity


class FakeContext:
    def __init__(self, inputs=None):
        self.inputs = dict(inputs or {})
        self.outputs = {}
        self.logger = logging.getLogger("test")

    def get_input(self, name):
        return self.inputs.get(name)

    def set_output(self, name, value):
        self.outputs[name] = value


@pytest.fixture
def database(tmp_path):
    path = tmp_path / "people.db"
    with closing_connection(path) as conn:
        conn.execute("create table people (name text, age integer)")
        conn.executemany(
            "insert into people values (?, ?)",
            [("ann", 25), ("bob", 35), ("cid", 45)],
        )
        conn.commit()
    return str(path)


class closing_connection:
    def __init__(self, path):
        self.conn = sqlite3.connect(path)

    def __enter__(self):
        return self.conn

    def __exit__(self, *exc):
        self.conn.close()


def _settings(dsn, **extra):
    settings = {
        "dbType": "sqlite",
        "driverName": "sqlite3",
        "dataSourceName": dsn,
        "query": "select name, age from people where age > :min order by name",
    }
    settings.update(extra)
    return settings


def test_prepared_select(database):
    with SqlQueryActivity.from_settings(_settings(database), sqlite3.connect) as act:
        ctx = FakeContext({"params": {"min": 30}})
        assert act.eval(ctx) is True
        assert ctx.outputs["results"] == [["bob", 35], ["cid", 45]]


def test_unprepared_select(database):
    settings = _settings(database, disablePrepared=True)
    with SqlQueryActivity.from_settings(settings, sqlite3.connect) as act:
        ctx = FakeContext({"params": {"min": 40}})
        act.eval(ctx)
        assert ctx.outputs["results"] == [["cid", 45]]


def test_labeled_results(database):
    settings = _settings(database, labeledResults=True)
    with SqlQueryActivity.from_settings(settings) as act:
        ctx = FakeContext({"params": {"min": 40}})
        act.eval(ctx)
        assert ctx.outputs["results"] == [{"name": "cid", "age": 45}]


def test_no_rows_gives_empty_list(database):
    with SqlQueryActivity.from_settings(_settings(database)) as act:
        ctx = FakeContext({"params": {"min": 100}})
        act.eval(ctx)
        assert ctx.outputs["results"] == []


def test_only_select_supported(database):
    settings = _settings(database, query="delete from people where age = :age")
    with pytest.raises(ValueError, match="only select statement is supported"):
        SqlQueryActivity.from_settings(settings)


def test_unknown_db_type(database):
    with pytest.raises(ValueError, match="unknown type"):
        SqlQueryActivity.from_settings(_settings(database, dbType="db2"))


def test_required_setting(database):
    settings = _settings(database)
    del settings["query"]
    with pytest.raises(ValueError, match="query is required"):
        SqlQueryActivity.from_settings(settings)