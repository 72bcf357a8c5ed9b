import threading

import pytest

from flowkit.activity import ActivityContext
from flowkit.counter import Counter, CounterActivity, get_counter


@pytest.fixture
def counter():
    c = get_counter("test")
    c.reset()
    return c


def test_increment(counter):
    act = CounterActivity.from_settings({"counterName": "test", "op": "increment"})
    ctx = ActivityContext()
    assert act.eval(ctx) is True
    assert ctx.get_output("value") == 1


def test_get(counter):
    act = CounterActivity.from_settings({"counterName": "test", "op": "get"})
    counter.increment()
    counter.increment()
    counter.increment()
    ctx = ActivityContext()
    act.eval(ctx)
    assert ctx.get_output("value") == 3


def test_reset(counter):
    act = CounterActivity.from_settings({"counterName": "test", "op": "reset"})
    counter.increment()
    counter.increment()
    counter.increment()
    ctx = ActivityContext()
    act.eval(ctx)
    assert ctx.get_output("value") == 0
    assert counter.get() == 0


def test_default_op_is_get(counter):
    act = CounterActivity.from_settings({"counterName": "test"})
    counter.increment()
    ctx = ActivityContext()
    act.eval(ctx)
    assert ctx.get_output("value") == counter.get()
    assert act.op == "get"


def test_get_counter_returns_shared_counter():
    first = get_counter("shared-name")
    first.reset()
    first.increment()
    first.increment()
    assert get_counter("shared-name").get() == 2


def test_invalid_op_raises():
    with pytest.raises(ValueError):
        CounterActivity.from_settings({"counterName": "test", "op": "double"})


def test_missing_name_raises():
    with pytest.raises(ValueError):
        CounterActivity.from_settings({"op": "get"})


def test_concurrent_increments():
    c = Counter()
    threads = [threading.Thread(target=lambda: [c.increment() for _ in range(500)]) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert c.get() == 2000