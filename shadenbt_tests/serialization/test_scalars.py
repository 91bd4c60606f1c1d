import math

import pytest

from shadenbt.serialization import BadDataError, Deserializer, Serializer, ValueOutOfRangeError
from shadenbt.serialization.encoding.bool import decode_bool, encode_bool
from shadenbt.serialization.encoding.float import decode_float, encode_float, pack_float


def test_float_special_values() -> None:
    se = Serializer.build_bytes_serializer()
    encode_float(se, math.inf, length=4)
    encode_float(se, -0.0, length=8)
    encode_float(se, math.nan, length=8)
    de = Deserializer.build_bytes_deserializer(se.finalize())
    assert decode_float(de, length=4) == math.inf
    negative_zero = decode_float(de, length=8)
    assert negative_zero == 0.0 and math.copysign(1.0, negative_zero) == -1.0
    assert math.isnan(decode_float(de, length=8))
    de.finalize()


def test_float_single_precision_rounding() -> None:
    de = Deserializer.build_bytes_deserializer(pack_float(0.1, length=4))
    value = decode_float(de, length=4)
    assert value != 0.1
    assert abs(value - 0.1) < 1e-7


def test_float_overflow() -> None:
    with pytest.raises(ValueOutOfRangeError):
        pack_float(1e39, length=4)
    assert len(pack_float(1e39, length=8)) == 8


def test_bool_encoding() -> None:
    se = Serializer.build_bytes_serializer()
    encode_bool(se, True)
    encode_bool(se, False)
    assert bytes(se.finalize()) == b'\x01\x00'


@pytest.mark.parametrize('byte', [2, 0x80, 0xff])
def test_invalid_bool(byte: int) -> None:
    with pytest.raises(BadDataError):
        decode_bool(Deserializer.build_bytes_deserializer(bytes([byte])))
