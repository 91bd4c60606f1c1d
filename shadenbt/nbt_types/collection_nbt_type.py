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

from collections import deque
from collections.abc import Callable, Collection, Hashable, Iterable, Iterator
from typing import ClassVar, TypeVar

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError
from shadenbt.utils.typing import get_args, get_origin

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)

# text and binary values are collections too, but they have their own representations
_NOT_A_SEQUENCE = (str, bytes, bytearray, memoryview)


class _CollectionNBTType(NBTType[Collection[T]]):
    """ Homogeneous collections, written as a sequence whose elements all use the member representation.

    Subclasses only pick the concrete container through `_container`.
    """
    __slots__ = ('_member',)

    _container: ClassVar[Callable[[Iterable], Collection]]
    _member: NBTType[T]

    def __init__(self, member_nbt_type: NBTType[T], /) -> None:
        self._member = member_nbt_type

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[T]], /, *, type_map: NBTType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Collection):
            raise TypeError('expected Collection type')
        match get_args(type_):
            case (member_type,):
                return cls(NBTType.from_type(member_type, type_map=type_map))
            case _:
                raise TypeError(f'expected {origin_type.__name__}[<type>]')

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, _NOT_A_SEQUENCE):
            raise SerializationTypeError(f'expected a collection, got {type(value).__name__}')
        if deep:
            for member in value:
                self._member._check_value(member, deep=True)

    @override
    def _serialize(self, encoder: NBTEncoder, value: Collection[T], /) -> None:
        with encoder.visit_sequence(len(value)) as sequence:
            for member in value:
                sequence.element(member, self._member.serialize)

    def _read_members(self, decoder: NBTDecoder) -> Iterator[T]:
        with decoder.read_sequence() as elements:
            for _ in elements:
                yield self._member.deserialize(decoder)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> Collection[T]:
        return self._container(list(self._read_members(decoder)))


class ListNBTType(_CollectionNBTType[T]):
    """ Represents builtin `list` values.
    """
    _container = list


class DequeNBTType(_CollectionNBTType[T]):
    """ Represents `collections.deque` values, `maxlen` is not preserved.
    """
    _container = deque


class SetNBTType(_CollectionNBTType[H]):
    """ Represents builtin `set` values, elements are written in iteration order.

    A sequence that repeats an element cannot have come from a set, so it is rejected when decoding.
    """
    _container = set

    @override
    def _check_value(self, value: Collection[H], /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        for member in value:
            if not isinstance(member, Hashable):
                raise SerializationTypeError(f'set members must be hashable, got {type(member).__name__}')

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> Collection[H]:
        members = list(self._read_members(decoder))
        result = self._container(members)
        if len(result) != len(members):
            raise BadDataError(f'{len(members) - len(result)} repeated elements in a set')
        return result


class FrozenSetNBTType(SetNBTType[H]):
    """ Represents builtin `frozenset` values.
    """
    _container = frozenset
