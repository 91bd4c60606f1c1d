import pytest

from shadenbt.serialization import (
    Deserializer,
    Serializer,
    StringLengthOverflowError,
    UnexpectedEndOfInputError,
)
from shadenbt.serialization.encoding.mutf8 import (
    MAX_NAME_LENGTH,
    decode_mutf8,
    decode_mutf8_name,
    encode_mutf8,
    encode_mutf8_name,
    mutf8_decode,
    mutf8_encode,
)


def test_ascii_is_unchanged() -> None:
    assert mutf8_encode('shade') == b'shade'


def test_nul_is_two_bytes() -> None:
    assert mutf8_encode('\x00') == b'\xc0\x80'
    assert mutf8_decode(b'\xc0\x80') == '\x00'


def test_bmp_characters_match_utf8() -> None:
    text = 'áéíóúçãõ€'
    assert mutf8_encode(text) == text.encode('utf-8')


def test_terminated_string() -> None:
    se = Serializer.build_bytes_serializer()
    encode_mutf8(se, 'a\x00b')
    data = bytes(se.finalize())
    assert data == b'a\xc0\x80b\x00'
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_mutf8(de) == 'a\x00b'
    de.finalize()


def test_empty_string() -> None:
    se = Serializer.build_bytes_serializer()
    encode_mutf8(se, '')
    assert bytes(se.finalize()) == b'\x00'


def test_missing_terminator() -> None:
    with pytest.raises(UnexpectedEndOfInputError):
        decode_mutf8(Deserializer.build_bytes_deserializer(b'abc'))


def test_name_length_limit() -> None:
    se = Serializer.build_bytes_serializer()
    encode_mutf8_name(se, b'a' * MAX_NAME_LENGTH)
    assert se.cur_pos() == 2 + MAX_NAME_LENGTH

    se = Serializer.build_bytes_serializer()
    with pytest.raises(StringLengthOverflowError):
        encode_mutf8_name(se, b'a' * (MAX_NAME_LENGTH + 1))
    assert se.cur_pos() == 0


def test_name_round_trip() -> None:
    se = Serializer.build_bytes_serializer()
    encode_mutf8_name(se, mutf8_encode('ç'))
    data = bytes(se.finalize())
    assert data == b'\x02\x00\xc3\xa7'
    assert decode_mutf8_name(Deserializer.build_bytes_deserializer(data)) == 'ç'
