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

from enum import Enum
from typing import TypeVar

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError
from shadenbt.utils.typing import is_subclass

E = TypeVar('E', bound=Enum)


def write_unit(encoder: NBTEncoder, value: None, /) -> None:
    encoder.visit_unit()


class EnumNBTType(NBTType[E]):
    """ Represents Enum subclasses as a compound with a single field, named after the member, holding a unit value.

    Only the member's name goes on the wire, not its value.
    """

    __slots__ = ('enum_class',)

    def __init__(self, enum_class: type[E]) -> None:
        self.enum_class = enum_class

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError('expected Enum subclass')
        return cls(type_)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self.enum_class):
            raise SerializationTypeError(f'expected {self.enum_class.__name__}')

    @override
    def _serialize(self, encoder: NBTEncoder, value: E, /) -> None:
        with encoder.visit_compound() as compound:
            compound.field(value.name, None, write_unit)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> E:
        member: E | None = None
        with decoder.read_compound() as fields:
            for name in fields:
                if member is not None:
                    raise BadDataError(f'more than one {self.enum_class.__name__} variant')
                try:
                    member = self.enum_class[name]
                except KeyError as e:
                    raise BadDataError(f'invalid {self.enum_class.__name__} variant: {name!r}') from e
                decoder.read_unit()
        if member is None:
            raise BadDataError(f'missing {self.enum_class.__name__} variant')
        return member
