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
from typing import TypeVar

from structlog import get_logger
from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.nbt_types.utils import is_union
from shadenbt.utils.typing import get_args

logger = get_logger()

V = TypeVar('V')

# name of the single field of a present optional value
OPTIONAL_VALUE_FIELD = 'value'


class OptionalNBTType(NBTType[V | None]):
    """ Represents a nbt_type that is either `V` or `None`.

    There's no tag for "nothing", so the value is wrapped in a compound: `None` is an empty compound and any other
    value is the only field of the compound, named "value". Inside records the wrapper is not used, a `None` field is
    omitted instead.
    """

    __slots__ = ('_value',)

    _value: NBTType[V]

    def __init__(self, nbt_type: NBTType[V]) -> None:
        self._value = nbt_type

    @property
    def inner(self) -> NBTType[V]:
        return self._value

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_union(type_):
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise TypeError('type must be either `None | T` or `T | None`')
        not_none_type, = (arg for arg in args if arg is not NoneType)
        return cls(NBTType.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def _serialize(self, encoder: NBTEncoder, value: V | None, /) -> None:
        with encoder.visit_compound() as compound:
            if value is not None:
                compound.field(OPTIONAL_VALUE_FIELD, value, self._value.serialize)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> V | None:
        result: V | None = None
        with decoder.read_compound() as fields:
            for name in fields:
                if name == OPTIONAL_VALUE_FIELD:
                    result = self._value.deserialize(decoder)
                else:
                    logger.debug('unknown field skipped', field=name)
                    decoder.skip()
        return result
