from io import BytesIO

import pytest

from shadenbt.serialization import (
    Deserializer,
    Serializer,
    StreamIOError,
    TrailingDataError,
    UnexpectedEndOfInputError,
)
from shadenbt.serialization.adapters import MaxBytesExceededError


def test_bytes_serializer_joins_writes() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_byte(0x01)
    buf = bytearray(b'\x02\x03')
    se.write_bytes(buf)
    # the serializer must have copied the data
    buf[0] = 0xff
    assert se.cur_pos() == 3
    assert bytes(se.finalize()) == b'\x01\x02\x03'


def test_bytes_deserializer_reads() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x04')
    assert de.peek_byte() == 1
    assert de.read_byte() == 1
    assert bytes(de.read_bytes(2)) == b'\x02\x03'
    assert not de.is_empty()
    assert de.read_byte() == 4
    assert de.is_empty()
    de.finalize()


def test_bytes_deserializer_short_read() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    with pytest.raises(UnexpectedEndOfInputError):
        de.read_bytes(3)
    # a non-exact read returns what's there
    assert bytes(de.read_bytes(3, exact=False)) == b'\x01\x02'
    with pytest.raises(UnexpectedEndOfInputError):
        de.read_byte()


def test_bytes_deserializer_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    de.read_byte()
    with pytest.raises(TrailingDataError):
        de.finalize()


def test_read_until() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc\x00de\x00')
    assert de.read_until(0) == b'abc'
    assert de.read_until(0) == b'de'
    de.finalize()


def test_read_until_without_terminator() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc')
    with pytest.raises(UnexpectedEndOfInputError):
        de.read_until(0)


def test_stream_round_trip() -> None:
    stream = BytesIO()
    se = Serializer.build_stream_serializer(stream)
    se.write_bytes(b'hello')
    se.write_byte(0)
    assert se.cur_pos() == 6
    assert stream.getvalue() == b'hello\x00'

    de = Deserializer.build_stream_deserializer(BytesIO(b'hello\x00rest'))
    assert de.read_until(0) == b'hello'
    assert de.peek_bytes(2) == b're'
    assert de.read_all() == b'rest'
    de.finalize()


def test_stream_deserializer_reads_only_what_is_needed() -> None:
    stream = BytesIO(b'\x01\x02\x03\x04')
    de = Deserializer.build_stream_deserializer(stream)
    assert de.read_bytes(2) == b'\x01\x02'
    assert stream.read() == b'\x03\x04'


def test_stream_deserializer_eof() -> None:
    de = Deserializer.build_stream_deserializer(BytesIO(b'\x01'))
    with pytest.raises(UnexpectedEndOfInputError):
        de.read_bytes(2)


class _BrokenStream(BytesIO):
    def write(self, data):  # type: ignore[no-untyped-def, override]
        raise OSError('disk full')

    def read(self, size=-1):  # type: ignore[no-untyped-def, override]
        raise OSError('connection reset')


def test_stream_errors_are_wrapped() -> None:
    with pytest.raises(StreamIOError) as write_exc:
        Serializer.build_stream_serializer(_BrokenStream()).write_bytes(b'x')
    assert isinstance(write_exc.value.__cause__, OSError)

    with pytest.raises(StreamIOError) as read_exc:
        Deserializer.build_stream_deserializer(_BrokenStream()).read_byte()
    assert isinstance(read_exc.value.__cause__, OSError)


def test_max_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer().limited(3)
    se.write_bytes(b'ab')
    se.write_byte(0x63)
    with pytest.raises(MaxBytesExceededError):
        se.write_byte(0x64)


def test_max_bytes_deserializer() -> None:
    de = Deserializer.build_bytes_deserializer(b'abc\x00def').limited(5)
    assert de.read_until(0) == b'abc'
    assert de.read_byte() == ord('d')
    with pytest.raises(MaxBytesExceededError):
        de.read_byte()


def test_no_limit_returns_the_same_serializer() -> None:
    se = Serializer.build_bytes_serializer()
    assert se.limited(None) is se
    de = Deserializer.build_bytes_deserializer(b'')
    assert de.limited(None) is de
