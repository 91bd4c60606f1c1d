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

from dataclasses import is_dataclass
from typing import Any

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.nbt_types.utils import is_union
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError
from shadenbt.utils.typing import get_args


class DataclassUnionNBTType(NBTType[Any]):
    """ Represents a union of dataclasses, `A | B`, as a compound with a single field named after the value's class.

    >>> from dataclasses import dataclass
    >>> from shadenbt.nbt_types import make_nbt_type
    >>> @dataclass
    ... class Circle:
    ...     radius: float
    >>> @dataclass
    ... class Square:
    ...     side: float
    >>> shape = make_nbt_type(Circle | Square)
    >>> shape.from_bytes(shape.to_bytes(Square(2.0)))
    Square(side=2.0)
    """

    __slots__ = ('_variants', '_names')

    _variants: dict[str, NBTType]
    _names: dict[type, str]

    def __init__(self, variants: dict[type, NBTType]) -> None:
        self._names = {}
        self._variants = {}
        for class_, nbt_type in variants.items():
            name = class_.__name__
            if name in self._variants:
                raise TypeError(f'two union members are named {name}')
            self._names[class_] = name
            self._variants[name] = nbt_type

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: NBTType.TypeMap) -> Self:
        if not is_union(type_):
            raise TypeError('expected type union')
        args = get_args(type_)
        if not all(isinstance(arg, type) and is_dataclass(arg) for arg in args):
            raise TypeError('expected a union of dataclasses')
        return cls({arg: NBTType.from_type(arg, type_map=type_map) for arg in args})

    def _get_name(self, value: Any) -> str:
        name = self._names.get(type(value))
        if name is None:
            expected = ', '.join(self._variants)
            raise SerializationTypeError(f'expected one of {expected}, got {type(value).__name__}')
        return name

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        name = self._get_name(value)
        if deep:
            self._variants[name]._check_value(value, deep=True)

    @override
    def _serialize(self, encoder: NBTEncoder, value: Any, /) -> None:
        name = self._get_name(value)
        with encoder.visit_compound() as compound:
            compound.field(name, value, self._variants[name].serialize)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> Any:
        found = False
        result: Any = None
        with decoder.read_compound() as fields:
            for name in fields:
                if found:
                    raise BadDataError('more than one union variant')
                variant = self._variants.get(name)
                if variant is None:
                    raise BadDataError(f'invalid union variant: {name!r}')
                result = variant.deserialize(decoder)
                found = True
        if not found:
            raise BadDataError('missing union variant')
        return result
