import logging

import pytest

from flowkit.activity import (
    ActivityContext,
    ActivityError,
    ActivityHost,
    ErrorActivity,
    LogActivity,
    Mapper,
    NoopActivity,
    Scope,
    new_mapper,
)


def test_noop_eval_is_done():
    assert NoopActivity().eval(ActivityContext()) is True


def test_simple_error():
    ctx = ActivityContext()
    ctx.set_input("message", "test error")
    with pytest.raises(ActivityError) as info:
        ErrorActivity().eval(ctx)
    assert str(info.value) == "test error"
    assert info.value.code == ""


def test_error_carries_data():
    ctx = ActivityContext(inputs={"message": "boom", "data": {"k": 1}})
    with pytest.raises(ActivityError) as info:
        ErrorActivity().eval(ctx)
    assert info.value.data == {"k": 1}


def test_log_with_details(caplog):
    caplog.set_level(logging.INFO, logger="flowkit.activity")
    host = ActivityHost(id="1", name="flow")
    ctx = ActivityContext(name="log", host=host)
    ctx.set_input("message", "test message")
    ctx.set_input("addDetails", True)
    assert LogActivity().eval(ctx) is True
    assert "'test message' - HostID [1], HostName [flow], Activity [log]" in caplog.messages


def test_log_plain_message(caplog):
    caplog.set_level(logging.INFO, logger="flowkit.activity")
    ctx = ActivityContext(inputs={"message": "test message"})
    assert LogActivity().eval(ctx) is True
    assert caplog.messages == ["test message"]


def test_scope_values_and_parent():
    parent = Scope({"a": 1})
    child = Scope(parent=parent)
    child.set_value("b", 2)
    assert child.get_value("a") == 1
    assert child.get_value("b") == 2
    assert child.get_value("missing") is None
    assert "a" in child and "missing" not in child


def test_context_outputs_round_trip():
    ctx = ActivityContext()
    ctx.set_output("value", 5)
    assert ctx.get_output("value") == 5
    assert ctx.get_input("absent") is None


def test_host_reply_and_return():
    host = ActivityHost()
    host.reply({"x": 1}, None)
    host.return_result({"y": 2}, None)
    assert host.reply_data == {"x": 1}
    assert host.return_data == {"y": 2}


def test_new_mapper_empty_is_none():
    assert new_mapper({}) is None
    assert new_mapper(None) is None


def test_mapper_literals():
    mapper = new_mapper({"Output1": "1", "Output2": 2.0})
    assert mapper.apply(Scope()) == {"Output1": "1", "Output2": 2.0}


def test_mapper_scope_reference():
    mapper = Mapper({"out": "=$.a.b"})
    assert mapper.apply(Scope({"a": {"b": "value"}})) == {"out": "value"}
    assert mapper.apply(Scope()) == {"out": None}


def test_mapper_rejects_unsupported_expression():
    with pytest.raises(ValueError):
        Mapper({"out": "=1 + 2"})


def test_mapper_rejects_non_mapping():
    with pytest.raises(TypeError):
        Mapper(["a"])