import threading
import uuid

import pytest

from flowkit.activity import ActivityContext
from flowkit.channel import (
    ChannelActivity,
    create_channel,
    get_channel,
    start_channels,
    stop_channels,
)


def _name():
    return f"test-{uuid.uuid4().hex}"


def test_eval_publishes_to_callback():
    name = _name()
    ch = create_channel(name, 5)
    assert get_channel(name) is ch

    ctx = ActivityContext(inputs={"channel": name, "data": 2})
    assert ChannelActivity().eval(ctx) is True

    found = []
    received = threading.Event()

    def callback(msg):
        found.append(msg)
        received.set()

    ch.register_callback(callback)
    start_channels()
    try:
        assert received.wait(2.0)
    finally:
        stop_channels()
    assert found == [2]


def test_messages_arrive_in_order():
    ch = create_channel(_name(), 10)
    seen = []
    for n in range(5):
        ch.publish(n)
    ch.register_callback(seen.append)
    ch.start()
    ch.stop()
    assert seen == [0, 1, 2, 3, 4]


def test_publish_no_wait_when_full():
    ch = create_channel(_name(), 1)
    assert ch.publish_no_wait("a") is True
    assert ch.publish_no_wait("b") is False


def test_duplicate_channel_raises():
    name = _name()
    create_channel(name, 1)
    with pytest.raises(ValueError):
        create_channel(name, 1)


def test_unknown_channel_is_none():
    assert get_channel(_name()) is None


def test_missing_channel_name_raises():
    with pytest.raises(ValueError, match="must be specified"):
        ChannelActivity().eval(ActivityContext(inputs={"data": 1}))


def test_unregistered_channel_raises():
    ctx = ActivityContext(inputs={"channel": _name(), "data": 1})
    with pytest.raises(ValueError, match="not registered"):
        ChannelActivity().eval(ctx)


def test_negative_buffer_raises():
    with pytest.raises(ValueError):
        create_channel(_name(), -1)