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

from types import NoneType

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import SerializationTypeError


class NullNBTType(NBTType[None]):
    """ Represents `None` as a type, the unit value, which is written as an empty compound.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[None], /, *, type_map: NBTType.TypeMap) -> Self:
        if type_ is not None and type_ is not NoneType:
            raise TypeError('expected None type')
        return cls()

    @override
    def _check_value(self, value: None, /, *, deep: bool) -> None:
        if value is not None:
            raise SerializationTypeError('expected None')

    @override
    def _serialize(self, encoder: NBTEncoder, value: None, /) -> None:
        encoder.visit_unit()

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> None:
        decoder.read_unit()
