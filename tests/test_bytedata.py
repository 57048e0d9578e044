import pytest

from gnssrx.bytedata import ByteData


def test_append_bytes_and_bytedata():
    data = ByteData(b"\x01")
    data.append(b"\x02\x03")
    data.append(ByteData(b"\x04"))
    assert bytes(data) == b"\x01\x02\x03\x04"
    assert len(data) == 4


def test_remove_left():
    data = ByteData(b"abcdef")
    data.remove_left(2)
    assert bytes(data) == b"cdef"


def test_remove_left_too_much_raises_and_keeps_data():
    data = ByteData(b"ab")
    with pytest.raises(ValueError):
        data.remove_left(3)
    assert bytes(data) == b"ab"


def test_invert_pins_values():
    data = ByteData(b"\x00\xff")
    data.invert()
    assert bytes(data) == b"\xff\x00"


def test_invert_twice_restores():
    original = bytes(range(0, 256, 7))
    data = ByteData(original)
    data.invert()
    data.invert()
    assert bytes(data) == original


def test_invert_affects_only_remaining():
    data = ByteData(b"\x00\x00\x0f")
    data.remove_left(2)
    data.invert()
    assert bytes(data) == b"\xf0"


def test_peek_does_not_consume():
    data = ByteData(b"xyz")
    assert data.peek(2) == b"xy"
    assert len(data) == 3


def test_take_consumes():
    data = ByteData(b"xyz")
    assert data.take(2) == b"xy"
    assert bytes(data) == b"z"


def test_peek_too_short_raises():
    with pytest.raises(ValueError):
        ByteData(b"x").peek(2)


def test_clear_empties():
    data = ByteData(b"abc")
    data.clear()
    assert len(data) == 0
    assert bytes(data) == b""


def test_indexing_and_equality():
    data = ByteData(b"\x8b\x01")
    assert data[0] == 0x8B
    assert data == ByteData(b"\x8b\x01")
    assert data == b"\x8b\x01"


def test_copy_is_independent():
    source = ByteData(b"abc")
    copy = ByteData(source)
    source.clear()
    assert bytes(copy) == b"abc"