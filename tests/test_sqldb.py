import pytest

from flowkit.sqldb import BindType, DbType, get_db_helper, to_db_type


@pytest.mark.parametrize(
    "name, expected",
    [
        ("mysql", DbType.MYSQL),
        ("MySQL", DbType.MYSQL),
        ("oracle", DbType.ORACLE),
        ("postgres", DbType.POSTGRES),
        ("SQLite", DbType.SQLITE),
        ("sqlserver", DbType.SQLSERVER),
    ],
)
def test_to_db_type(name, expected):
    assert to_db_type(name) is expected


@pytest.mark.parametrize("name", ["postres", "unknown", "", "db2"])
def test_to_db_type_unknown(name):
    with pytest.raises(ValueError, match="unknown type"):
        to_db_type(name)


@pytest.mark.parametrize(
    "name, bind_type",
    [
        ("mysql", BindType.QUESTION),
        ("oracle", BindType.COLON),
        ("postgres", BindType.DOLLAR),
        ("sqlite", BindType.QUESTION),
        ("sqlserver", BindType.AT),
    ],
)
def test_helper_bind_types(name, bind_type):
    helper = get_db_helper(name)
    assert helper.bind_type is bind_type
    assert helper.db_type is to_db_type(name)


def test_get_db_helper_unknown():
    with pytest.raises(ValueError):
        get_db_helper("postres")


@pytest.mark.parametrize(
    "name, true_text, false_text",
    [
        ("mysql", "true", "false"),
        ("oracle", "1", "0"),
        ("postgres", "TRUE", "FALSE"),
        ("sqlite", "1", "0"),
        ("sqlserver", "TRUE", "FALSE"),
    ],
)
def test_boolean_literals(name, true_text, false_text):
    helper = get_db_helper(name)
    assert helper.to_sql_value(True) == true_text
    assert helper.to_sql_value(False) == false_text


@pytest.mark.parametrize("name", ["mysql", "oracle", "postgres", "sqlite", "sqlserver"])
def test_numbers_and_strings(name):
    helper = get_db_helper(name)
    assert helper.to_sql_value(2) == "2"
    assert helper.to_sql_value("test") == "'test'"


def test_float_is_written_bare():
    assert get_db_helper("mysql").to_sql_value(1.5) == "1.5"


def test_none_is_an_empty_quoted_string():
    assert get_db_helper("mysql").to_sql_value(None) == "''"