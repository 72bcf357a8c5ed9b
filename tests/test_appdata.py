import pytest

from flowkit.activity import ActivityContext
from flowkit.appdata import AppDataActivity, get_value, set_value
from flowkit.coerce import CoercionError, DataType, to_string


def test_set():
    act = AppDataActivity.from_settings({"name": "test", "op": "set"})
    ctx = ActivityContext()
    ctx.set_input("value", "foo")
    assert act.eval(ctx) is True
    assert get_value("test") == "foo"


def test_get():
    set_value("test", "bar")
    act = AppDataActivity.from_settings({"name": "test", "op": "get"})
    ctx = ActivityContext()
    ctx.set_input("value", "bar")
    act.eval(ctx)
    assert ctx.get_output("value") == "bar"
    assert get_value("test") == "bar"


def test_set_coerces_to_type():
    act = AppDataActivity.from_settings({"name": "typed", "op": "set", "type": "string"})
    ctx = ActivityContext(inputs={"value": 12})
    act.eval(ctx)
    assert get_value("typed") == to_string(12)


def test_get_coerces_to_type():
    set_value("flag", "true")
    act = AppDataActivity.from_settings({"name": "flag", "type": "bool"})
    ctx = ActivityContext()
    act.eval(ctx)
    assert ctx.get_output("value") is True
    assert act.data_type is DataType.BOOL


def test_get_missing_value_is_none():
    act = AppDataActivity.from_settings({"name": "never-set-here", "type": "int"})
    ctx = ActivityContext()
    act.eval(ctx)
    assert ctx.get_output("value") is None


def test_missing_name_raises():
    with pytest.raises(ValueError):
        AppDataActivity.from_settings({"op": "get"})


def test_invalid_op_raises():
    with pytest.raises(ValueError):
        AppDataActivity.from_settings({"name": "x", "op": "delete"})


def test_unknown_type_raises():
    with pytest.raises(CoercionError):
        AppDataActivity.from_settings({"name": "x", "type": "nope"})