import pytest

from shadenbt.consts import HEADER_FLAGS, HEADER_MAGIC
from shadenbt.decoder import NBTDecoder
from shadenbt.header import has_high_bit, read_header, write_header
from shadenbt.serialization import Deserializer, InvalidHeaderError, Serializer, UnexpectedEndOfInputError


def _read(data: bytes) -> int:
    return read_header(Deserializer.build_bytes_deserializer(data))


def test_write_header() -> None:
    se = Serializer.build_bytes_serializer()
    write_header(se)
    assert bytes(se.finalize()) == bytes.fromhex('ad4e4254000480')


def test_read_header_returns_flags() -> None:
    assert _read(HEADER_MAGIC + b'\x80') == HEADER_FLAGS
    # flags are kept as they are, whatever their value
    assert _read(HEADER_MAGIC + b'\x00') == 0
    assert has_high_bit(0x80)
    assert not has_high_bit(0x7f)


@pytest.mark.parametrize('flags, high_bit', [(0x80, True), (0xff, True), (0x00, False), (0x7f, False)])
def test_decoder_flags_high_bit(flags: int, high_bit: bool) -> None:
    decoder = NBTDecoder(Deserializer.build_bytes_deserializer(HEADER_MAGIC + bytes([flags]) + b'\x00'), max_depth=8)
    assert decoder.read_header() == flags
    assert decoder.flags_high_bit is high_bit


@pytest.mark.parametrize('data', [
    bytes.fromhex('0a000000000480'),
    bytes.fromhex('ad4e4254000380'),
    bytes.fromhex('ad4e42550004800a00'),
    bytes.fromhex('ff'),
    b'{"json": true}',
])
def test_invalid_header(data: bytes) -> None:
    with pytest.raises(InvalidHeaderError):
        _read(data)


def test_invalid_header_regardless_of_what_follows() -> None:
    for tail in (b'', b'\x80', b'\x80\x00', b'\x80' + b'\x0a' * 100):
        with pytest.raises(InvalidHeaderError):
            _read(bytes.fromhex('ad4e42540005') + tail)


@pytest.mark.parametrize('data', [
    b'',
    bytes.fromhex('ad'),
    bytes.fromhex('ad4e4254'),
    bytes.fromhex('ad4e42540004'),
])
def test_truncated_header(data: bytes) -> None:
    with pytest.raises(UnexpectedEndOfInputError):
        _read(data)
