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

from collections.abc import Iterable

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError, SerializationValueError
from shadenbt.utils.typing import get_args, get_origin


# XXX: we can't usefully describe the tuple type
class TupleNBTType(NBTType[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or fixed size.

    Both are written as a sequence, the members of a fixed size tuple must still share a tag on the wire, so
    `tuple[int, str]` can be built but fails when a value is encoded.
    """

    __slots__ = ('_varsize', '_args')

    _varsize: bool
    _args: tuple[NBTType, ...]

    def __init__(self, args: NBTType | Iterable[NBTType]) -> None:
        if isinstance(args, Iterable):
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, NBTType)
        else:
            assert isinstance(args, NBTType)
            self._varsize = True
            self._args = (args,)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, tuple):
            raise TypeError('expected tuple type')
        args = list(get_args(type_))
        if not args:
            raise TypeError('expected tuple[<args...>]')
        if args[-1] == Ellipsis:
            if len(args) != 2:
                raise TypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(NBTType.from_type(arg, type_map=type_map))
        else:
            return cls(NBTType.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise SerializationTypeError('expected tuple-like')
        if not self._varsize and len(value) != len(self._args):
            raise SerializationValueError(f'expected a tuple of {len(self._args)} items, got {len(value)}')
        if deep:
            if self._varsize:
                arg_nbt_type, = self._args
                for i in value:
                    arg_nbt_type._check_value(i, deep=True)
            else:
                for i, arg_nbt_type in zip(value, self._args):
                    arg_nbt_type._check_value(i, deep=True)

    def _item_type(self, index: int) -> NBTType:
        return self._args[0] if self._varsize else self._args[index]

    @override
    def _serialize(self, encoder: NBTEncoder, value: tuple, /) -> None:
        with encoder.visit_sequence(len(value)) as sequence:
            for index, item in enumerate(value):
                sequence.element(item, self._item_type(index).serialize)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> tuple:
        with decoder.read_sequence() as elements:
            if not self._varsize and len(elements) != len(self._args):
                raise BadDataError(f'expected a sequence of {len(self._args)} elements, found {len(elements)}')
            return tuple(self._item_type(index).deserialize(decoder) for index in elements)
