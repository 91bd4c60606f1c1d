import pytest

from shadenbt.serialization import ValueOutOfRangeError
from shadenbt.tag import Tag
from shadenbt.values import SIZED_INTS, Byte, Double, Float, Int, Long, Short


def test_sized_int_widths() -> None:
    assert [(cls.LENGTH, cls.TAG) for cls in SIZED_INTS] == [
        (1, Tag.U8),
        (2, Tag.U16),
        (4, Tag.U32),
        (8, Tag.U64),
    ]


@pytest.mark.parametrize('cls,lower,upper', [
    (Byte, -128, 127),
    (Short, -32768, 32767),
    (Int, -2147483648, 2147483647),
    (Long, -9223372036854775808, 9223372036854775807),
])
def test_sized_int_range(cls: type[int], lower: int, upper: int) -> None:
    assert cls(lower) == lower
    assert cls(upper) == upper
    with pytest.raises(ValueOutOfRangeError):
        cls(lower - 1)
    with pytest.raises(ValueOutOfRangeError):
        cls(upper + 1)


def test_sized_int_behaves_as_int() -> None:
    value = Short(300)
    assert value + 1 == 301
    assert isinstance(value, int)
    assert repr(value) == 'Short(300)'
    assert {value: 'x'}[300] == 'x'


def test_float_is_rounded_to_single_precision() -> None:
    assert Float(0.5) == 0.5
    assert Float(0.1) != 0.1
    assert Float(Float(0.1)) == Float(0.1)
    assert repr(Double(0.1)) == 'Double(0.1)'
    with pytest.raises(ValueOutOfRangeError):
        Float(1e300)
