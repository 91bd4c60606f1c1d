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

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import SerializationTypeError
from shadenbt.utils.typing import is_subclass


class BoolNBTType(NBTType[bool]):
    """ Represents builtin `bool` values, written as an `U8` holding 0 or 1.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[bool], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, bool):
            raise TypeError('expected bool type')
        return cls()

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if not isinstance(value, bool):
            raise SerializationTypeError('expected boolean')

    @override
    def _serialize(self, encoder: NBTEncoder, value: bool, /) -> None:
        encoder.visit_bool(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> bool:
        return decoder.read_bool()
