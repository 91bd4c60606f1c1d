from collections import OrderedDict, deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Annotated, Any, NamedTuple, Optional, TypeVar

from shadenbt.nbt_types import NBTType, make_nbt_type
from shadenbt.types import F32, I8, I16, I32, U8, U16, U32, U64, BlobSize, Char
from shadenbt.values import Byte, Float, Long, Short
from shadenbt_tests import unittest

T = TypeVar('T')


class Color(Enum):
    RED = 'r'
    GREEN = 'g'


class Level(IntEnum):
    LOW = auto()
    HIGH = auto()


@dataclass
class Point:
    x: I32
    y: I32


@dataclass
class Settings:
    name: str
    level: Level
    points: list[Point]
    tags: dict[str, U16]
    comment: Optional[str] = None
    ratio: F32 = 0.5
    flags: frozenset[U8] = field(default_factory=frozenset)


class Pair(NamedTuple):
    key: str
    value: Long


@dataclass
class Retry:
    attempts: Optional[U8] = 3
    delay: Optional[float] = None


class Limits(NamedTuple):
    low: Optional[I16] = -1
    high: Optional[I16] = None


@dataclass
class Circle:
    radius: float


@dataclass
class Square:
    side: float


@dataclass
class Drawing:
    shapes: list[Circle | Square]
    background: Color = Color.GREEN


class NBTTypeRoundTripTestCase(unittest.TestCase):
    def _run_test(self, type_: type[T], value: T) -> None:
        nbt_type = make_nbt_type(type_)
        value_bytes = nbt_type.to_bytes(value)
        value2: T = nbt_type.from_bytes(value_bytes)
        self.assertEqual(value, value2)

    def _run_test_nbt_type(self, nbt_type: NBTType[T], value: T) -> None:
        value_bytes = nbt_type.to_bytes(value)
        value2: T = nbt_type.from_bytes(value_bytes)
        self.assertEqual(value, value2)

    def test_bool(self) -> None:
        self._run_test(bool, True)
        self._run_test(bool, False)

    def test_ints(self) -> None:
        self._run_test(int, -100)
        self._run_test(int, 2 ** 63 - 1)
        self._run_test(I8, -128)
        self._run_test(U8, 255)
        self._run_test(I16, -32768)
        self._run_test(U16, 65535)
        self._run_test(I32, -1)
        self._run_test(U32, 2 ** 32 - 1)
        self._run_test(U64, 2 ** 64 - 1)

    def test_wrapped_ints_keep_their_type(self) -> None:
        nbt_type = make_nbt_type(Short)
        value = nbt_type.from_bytes(nbt_type.to_bytes(Short(-3)))
        self.assertIs(type(value), Short)
        self.assertEqual(value, -3)

    def test_floats(self) -> None:
        self._run_test(float, 0.1)
        self._run_test(float, -1e300)
        self._run_test(F32, 0.5)
        self._run_test(Float, Float(0.1))

    def test_str(self) -> None:
        self._run_test(str, '')
        self._run_test(str, 'shade')
        self._run_test(str, 'áéíóúçãõ')
        self._run_test(str, 'nul\x00inside')
        self._run_test(Char, 'x')

    def test_bytes(self) -> None:
        self._run_test(bytes, b'')
        self._run_test(bytes, b'\x00\x01\xff')
        self._run_test(bytearray, bytearray(b'abc'))

    def test_blob(self) -> None:
        self._run_test(Annotated[bytes, BlobSize(4)], b'\x00\x01\x02\x03')
        self._run_test(Annotated[bytes, BlobSize(0)], b'')

    def test_collections(self) -> None:
        self._run_test(list[str], ['a', 'b'])
        self._run_test(list[int], [])
        self._run_test(list[list[U8]], [[1, 2], [], [3]])
        self._run_test(deque[int], deque([1, 2]))
        self._run_test(set[str], {'a', 'b'})
        self._run_test(frozenset[int], frozenset({1, 2, 3}))
        self._run_test(tuple[str, ...], ('a', 'b', 'c'))
        self._run_test(tuple[int, int], (1, 2))

    def test_dicts(self) -> None:
        self._run_test(dict[str, int], {'a': 1, 'b': 2})
        self._run_test(dict[str, list[str]], {'a': [], 'b': ['x']})
        self._run_test(OrderedDict[str, int], {'a': 1})
        self._run_test(dict[str, dict[str, bool]], {'x': {'y': True}})

    def test_optional(self) -> None:
        self._run_test(Optional[int], None)
        self._run_test(Optional[int], 7)
        self._run_test(list[str | None], ['a', None, 'b'])

    def test_optional_field_with_default(self) -> None:
        self._run_test(Retry, Retry(None))
        self._run_test(Retry, Retry(None, 0.5))
        self._run_test(Retry, Retry())
        self._run_test(Limits, Limits(None, None))
        self._run_test(Limits, Limits(None, 10))
        self._run_test(Limits, Limits())
        self._run_test(list[Retry], [Retry(None), Retry(1)])

    def test_enum(self) -> None:
        self._run_test(Color, Color.RED)
        self._run_test(Level, Level.HIGH)
        self._run_test(list[Color], [Color.GREEN, Color.RED])

    def test_dataclass(self) -> None:
        value = Settings(
            name='main',
            level=Level.LOW,
            points=[Point(1, 2), Point(-3, 4)],
            tags={'a': 1, 'b': 65535},
            comment='hello',
            ratio=0.25,
            flags=frozenset({1, 2}),
        )
        self._run_test(Settings, value)
        self._run_test(Settings, Settings('x', Level.HIGH, [], {}))

    def test_namedtuple(self) -> None:
        self._run_test(Pair, Pair('k', Long(5)))
        self._run_test(list[Pair], [Pair('a', Long(1)), Pair('b', Long(2))])

    def test_dataclass_union(self) -> None:
        self._run_test(Drawing, Drawing([Circle(1.0), Square(2.0), Circle(0.5)]))
        self._run_test(Drawing, Drawing([], Color.RED))

    def test_any(self) -> None:
        self._run_test(dict[str, Any], {'a': 'x', 'b': [Byte(1), Byte(2)], 'c': {'d': Float(0.5)}})
