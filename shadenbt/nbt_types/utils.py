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
from dataclasses import is_dataclass
from enum import Enum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeAlias, TypeVar, Union

from structlog import get_logger

from shadenbt.serialization.exceptions import UnsupportedValueKindError
from shadenbt.utils.typing import get_args, get_origin, is_subclass

if TYPE_CHECKING:
    from shadenbt.nbt_types import NBTType


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[Any, type]
TypeToNBTTypeMap: TypeAlias = Mapping[Any, type['NBTType']]


class Dataclass:
    """ Key of a TypeToNBTTypeMap that matches every dataclass.
    """


class DataclassUnion:
    """ Key of a TypeToNBTTypeMap that matches unions whose members are all dataclasses.
    """


def is_union(type_: Any) -> bool:
    """ Whether the type is a `typing.Union`/`Optional` or a `A | B` union.

    >>> is_union(int | None)
    True
    >>> from typing import Optional
    >>> is_union(Optional[int])
    True
    >>> is_union(int)
    False
    """
    origin = get_origin(type_)
    return origin is Union or origin is UnionType


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(None)
    'None'
    >>> pretty_type(dict[str, int])
    'dict[str, int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__name__', repr(type_))


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `OrderedDict` is mapped to `dict` in the default alias map:

    >>> from collections import OrderedDict
    >>> from shadenbt.nbt_types import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(list[OrderedDict[str, int]], alias_map, _verbose=False)
    list[dict[str, int]]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_

    # XXX: the metadata of Annotated is not made of types, it's kept as is
    if origin_type is Annotated:
        return type_, False

    aliased_origin: Any
    replaced = False

    if origin_type is Union or origin_type is UnionType:
        aliased_origin = UnionType
    elif origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_) if hasattr(type_, '__args__') else ()
    if not type_args:
        # normal case when there aren't type arguments
        return (type_ if not replaced else aliased_origin), replaced

    # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
    aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
    aliased_args = tuple(arg for arg, _ in aliased_args_replaced)
    replaced |= any(arg_replaced for _, arg_replaced in aliased_args_replaced)

    if not replaced:
        return type_, False

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    # XXX: `tuple[int, ...]` has the Ellipsis as an argument, it's passed back as is
    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[aliased_args], replaced


def get_usable_origin_type(type_: Any, /, *, type_map: 'NBTType.TypeMap', _verbose: bool = True) -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a NBTType.TypeMap

    It takes into account type-aliasing according to NBTType.TypeMap.alias_map. If the given type cannot be used in
    the given type_map, an UnsupportedValueKindError exception will be raised.

    The returned key is guaranteed to exist in `type_map.nbt_types_map`:

    >>> from shadenbt.nbt_types import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(list[int], type_map=type_map, _verbose=False)
    <class 'list'>
    >>> get_usable_origin_type(int | str, type_map=type_map, _verbose=False)
    Traceback (most recent call last):
    ...
    shadenbt.serialization.exceptions.UnsupportedValueKindError: union int | str has no wire framing
    """
    if isinstance(type_, str):
        raise TypeError('string annotations are not supported, resolve them first')

    nbt_types_map = type_map.nbt_types_map
    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type

    if origin_aliased_type is Union or origin_aliased_type is UnionType:
        args = get_args(aliased_type)
        if NoneType in args:
            if len(args) == 2 and UnionType in nbt_types_map:
                return UnionType
        elif all(isinstance(arg, type) and is_dataclass(arg) for arg in args) and DataclassUnion in nbt_types_map:
            return DataclassUnion
        raise UnsupportedValueKindError(f'union {pretty_type(type_)} has no wire framing')

    if origin_aliased_type in nbt_types_map:
        return origin_aliased_type

    if isinstance(aliased_type, type):
        if Dataclass in nbt_types_map and is_dataclass(aliased_type):
            return Dataclass
        if Enum in nbt_types_map and is_subclass(aliased_type, Enum):
            return Enum
        if NamedTuple in nbt_types_map and NamedTuple in getattr(aliased_type, '__orig_bases__', tuple()):
            return NamedTuple

    raise UnsupportedValueKindError(f'type {pretty_type(type_)} is not supported by any NBTType class')
