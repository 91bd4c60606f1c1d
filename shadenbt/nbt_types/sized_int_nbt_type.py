# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from typing import Callable, ClassVar

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.encoding.int import check_int_range
from shadenbt.serialization.exceptions import SerializationTypeError, UnsupportedValueKindError
from shadenbt.utils.typing import is_subclass
from shadenbt.values import SizedInt


class _SizedIntNBTType(NBTType[int]):
    """ Base class for classes that represent builtin `int` values with a fixed size and signedness.

    When built from one of the `shadenbt.values` wrappers, decoded values are instances of that wrapper.
    """

    __slots__ = ('_build',)

    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]

    _build: Callable[[int], int]

    def __init__(self, build: Callable[[int], int] = int) -> None:
        self._build = build

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, int) or is_subclass(type_, bool):
            raise TypeError('expected int type')
        if isinstance(type_, type) and issubclass(type_, SizedInt):
            return cls(type_)
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SerializationTypeError('expected integer')
        check_int_range(value, length=self._byte_size, signed=self._signed)

    @override
    def _serialize(self, encoder: NBTEncoder, value: int, /) -> None:
        encoder.visit_int(value, length=self._byte_size, signed=self._signed)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> int:
        return self._build(decoder.read_int(length=self._byte_size, signed=self._signed))


class Int8NBTType(_SizedIntNBTType):
    _signed = True
    _byte_size = 1


class Uint8NBTType(_SizedIntNBTType):
    _signed = False
    _byte_size = 1


class Int16NBTType(_SizedIntNBTType):
    _signed = True
    _byte_size = 2


class Uint16NBTType(_SizedIntNBTType):
    _signed = False
    _byte_size = 2


class Int32NBTType(_SizedIntNBTType):
    _signed = True
    _byte_size = 4  # 4-bytes -> 32-bits


class Uint32NBTType(_SizedIntNBTType):
    _signed = False
    _byte_size = 4  # 4-bytes -> 32-bits


class Int64NBTType(_SizedIntNBTType):
    _signed = True
    _byte_size = 8


class Uint64NBTType(_SizedIntNBTType):
    _signed = False
    _byte_size = 8


class Int128NBTType(NBTType[int]):
    """ Stands for 128-bit integers in a TypeMap, there's no tag for them so building a schema with one fails.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: NBTType.TypeMap) -> Self:
        raise UnsupportedValueKindError('128-bit integers have no tag')

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if not isinstance(value, int):
            raise SerializationTypeError('expected integer')

    @override
    def _serialize(self, encoder: NBTEncoder, value: int, /) -> None:
        encoder.visit_i128(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> int:
        return decoder.read_i128()
