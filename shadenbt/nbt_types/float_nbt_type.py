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
from shadenbt.serialization.exceptions import SerializationTypeError
from shadenbt.utils.typing import is_subclass
from shadenbt.values import SizedFloat


class _SizedFloatNBTType(NBTType[float]):
    """ Base class for IEEE 754 floats, ints are accepted on encode and decode as floats.
    """

    __slots__ = ('_build',)

    # XXX: subclass must define this value:
    _byte_size: ClassVar[int]

    _build: Callable[[float], float]

    def __init__(self, build: Callable[[float], float] = float) -> None:
        self._build = build

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        if isinstance(type_, type) and issubclass(type_, SizedFloat):
            return cls(type_)
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise SerializationTypeError('expected float')

    @override
    def _serialize(self, encoder: NBTEncoder, value: float, /) -> None:
        if self._byte_size == 4:
            encoder.visit_f32(float(value))
        else:
            encoder.visit_f64(float(value))

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> float:
        if self._byte_size == 4:
            return self._build(decoder.read_f32())
        else:
            return self._build(decoder.read_f64())


class Float32NBTType(_SizedFloatNBTType):
    _byte_size = 4


class Float64NBTType(_SizedFloatNBTType):
    _byte_size = 8
