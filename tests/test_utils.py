import pytest

from flowkit import utils


def test_decode_base64():
    assert utils.decode_base64("SGVsbG8sIFdvcmxk") == b"Hello, World"


def test_encode_base64():
    assert utils.encode_base64(b"Hello, World") == b"SGVsbG8sIFdvcmxk"


def test_base64_round_trip():
    data = bytes(range(256))
    assert utils.decode_base64(utils.encode_base64(data)) == data


def test_decode_ignores_line_breaks():
    assert utils.decode_base64("SGVsbG8s\nIFdvcmxk") == b"Hello, World"


def test_decode_invalid():
    with pytest.raises(ValueError):
        utils.decode_base64("not base64!")


def test_uuid_format():
    value = utils.new_uuid()
    groups = value.split("-")
    assert [len(group) for group in groups] == [8, 4, 4, 4, 12]
    assert set(value.replace("-", "")) <= set("0123456789abcdef")
    assert groups[2][0] == "4"
    assert groups[3][0] in "89ab"


def test_uuid_unique():
    assert len({utils.new_uuid() for _ in range(100)}) == 100