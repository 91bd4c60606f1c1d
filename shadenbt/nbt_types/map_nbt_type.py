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

from collections.abc import Mapping
from typing import TypeVar

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError, UnsupportedValueKindError
from shadenbt.utils.typing import get_args, get_origin, is_subclass

T = TypeVar('T')


class DictNBTType(NBTType[Mapping[str, T]]):
    """ Represents `dict[str, T]` values as a compound, each entry becomes a field named by its key.

    Keys can only be text since they become field names. Entries are written in the dict's order and decoded back in
    wire order, a field name that appears twice is rejected.
    """

    __slots__ = ('_value',)

    _value: NBTType[T]

    def __init__(self, value: NBTType[T]) -> None:
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[str, T]], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Mapping):
            raise TypeError('expected Mapping type')
        match get_args(type_):
            case (key_type, value_type):
                if not is_subclass(key_type, str):
                    raise UnsupportedValueKindError(f'compound keys must be str, not {key_type}')
                return cls(NBTType.from_type(value_type, type_map=type_map))
            case _:
                raise TypeError(f'expected {origin_type.__name__}[<key type>, <value type>]')

    @override
    def _check_value(self, value: Mapping[str, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise SerializationTypeError(f'expected a mapping, got {type(value).__name__}')
        bad_keys = [key for key in value if not isinstance(key, str)]
        if bad_keys:
            raise SerializationTypeError(f'compound keys must be str, got {bad_keys[0]!r}')
        if deep:
            for entry in value.values():
                self._value._check_value(entry, deep=True)

    @override
    def _serialize(self, encoder: NBTEncoder, value: Mapping[str, T], /) -> None:
        with encoder.visit_compound() as compound:
            for key, entry in value.items():
                compound.field(key, entry, self._value.serialize)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> dict[str, T]:
        result: dict[str, T] = {}
        with decoder.read_compound() as fields:
            for name in fields:
                if name in result:
                    raise BadDataError(f'field {name!r} appears twice')
                result[name] = self._value.deserialize(decoder)
        return result
