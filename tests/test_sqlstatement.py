import pytest

from flowkit.sqldb import get_db_helper
from flowkit.sqlstatement import (
    StatementType,
    parse_statement,
    to_statement_type,
)

SQL_PLAIN = "select * from table where t = :foo and s = :bar"
SQL_QUOTED = 'select * from table where a = "ignore :blah" and t = :foo and s = :bar'
SQL_TRAILING = (
    'select * from table where a = "ignore :blah" and t = :foo and s = :bar and q = "tar"'
)


@pytest.mark.parametrize("db", ["mysql", "postgres", "sqlite"])
def test_question_style_placeholders(db):
    helper = get_db_helper(db)
    s = parse_statement(helper, SQL_PLAIN)
    assert str(s) == SQL_PLAIN
    assert s.prepared_sql == "select * from table where t = ? and s = ?"

    s = parse_statement(helper, SQL_QUOTED)
    assert str(s) == SQL_QUOTED
    assert s.prepared_sql == 'select * from table where a = "ignore :blah" and t = ? and s = ?'

    s = parse_statement(helper, SQL_TRAILING)
    assert str(s) == SQL_TRAILING
    assert s.prepared_sql == (
        'select * from table where a = "ignore :blah" and t = ? and s = ? and q = "tar"'
    )


def test_oracle_keeps_colon_placeholders():
    helper = get_db_helper("oracle")
    for sql in (SQL_PLAIN, SQL_QUOTED, SQL_TRAILING):
        s = parse_statement(helper, sql)
        assert str(s) == sql
        assert s.prepared_sql == sql


def test_sqlserver_uses_at_placeholders():
    helper = get_db_helper("sqlserver")
    s = parse_statement(helper, SQL_PLAIN)
    assert str(s) == SQL_PLAIN
    assert s.prepared_sql == "select * from table where t = @foo and s = @bar"

    s = parse_statement(helper, SQL_QUOTED)
    assert s.prepared_sql == (
        'select * from table where a = "ignore :blah" and t = @foo and s = @bar'
    )

    s = parse_statement(helper, SQL_TRAILING)
    assert s.prepared_sql == (
        'select * from table where a = "ignore :blah" and t = @foo and s = @bar and q = "tar"'
    )


@pytest.mark.parametrize(
    "db, expected",
    [
        ("mysql", "select * from table where t = true and s = 2 and r = 'test'"),
        ("oracle", "select * from table where t = 1 and s = 2 and r = 'test'"),
        ("postgres", "select * from table where t = TRUE and s = 2 and r = 'test'"),
        ("sqlite", "select * from table where t = 1 and s = 2 and r = 'test'"),
        ("sqlserver", "select * from table where t = TRUE and s = 2 and r = 'test'"),
    ],
)
def test_flatten_sql(db, expected):
    sql = "select * from table where t = :foo and s = :bar and r = :other"
    params = {"foo": True, "bar": 2, "other": "test"}
    s = parse_statement(get_db_helper(db), sql)
    assert s.to_statement_sql(params) == expected


def test_statement_type():
    s = parse_statement(get_db_helper("mysql"), "  SELECT a from b ")
    assert s.statement_type is StatementType.SELECT
    assert to_statement_type("Delete") is StatementType.DELETE
    with pytest.raises(ValueError, match="unknown statement type"):
        to_statement_type("drop")


def test_invalid_sql():
    with pytest.raises(ValueError, match="invalid sql"):
        parse_statement(get_db_helper("mysql"), "   ")
    with pytest.raises(ValueError, match="unknown statement type"):
        parse_statement(get_db_helper("mysql"), "create table x")


def test_has_params():
    helper = get_db_helper("mysql")
    assert parse_statement(helper, SQL_PLAIN).has_params() is True
    assert parse_statement(helper, "select * from t").has_params() is False


def test_positional_args_follow_parameter_order():
    s = parse_statement(get_db_helper("sqlite"), "select * from t where a = :b and c = :a")
    assert s.prepared_statement_args({"a": 1, "b": 2}) == [2, 1]


def test_named_args_are_a_mapping():
    s = parse_statement(get_db_helper("oracle"), SQL_PLAIN)
    assert s.prepared_statement_args({"foo": 1, "bar": 2}) == {"foo": 1, "bar": 2}


def test_dollar_args_are_distinct_in_order():
    s = parse_statement(
        get_db_helper("postgres"), "select * from t where a = :x and b = :y and c = :x"
    )
    assert s.placeholder_ids == {"x": 1, "y": 2}
    assert s.prepared_statement_args({"x": "one", "y": "two"}) == ["one", "two"]