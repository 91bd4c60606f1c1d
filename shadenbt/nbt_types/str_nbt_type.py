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
from shadenbt.serialization.exceptions import SerializationTypeError, SerializationValueError
from shadenbt.utils.typing import is_subclass


class StrNBTType(NBTType[str]):
    """ Represents builtin `str` values.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise SerializationTypeError('expected str')

    @override
    def _serialize(self, encoder: NBTEncoder, value: str, /) -> None:
        encoder.visit_str(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> str:
        return decoder.read_str()


class CharNBTType(StrNBTType):
    """ A `str` of exactly one character.
    """

    __slots__ = ()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        if len(value) != 1:
            raise SerializationValueError(f'expected a single character, got {value!r}')

    @override
    def _serialize(self, encoder: NBTEncoder, value: str, /) -> None:
        encoder.visit_char(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> str:
        return decoder.read_char()
