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

from collections import OrderedDict, deque
from enum import Enum
from types import NoneType, UnionType
from typing import Annotated, Any, NamedTuple, TypeVar

from shadenbt.nbt_types.any_nbt_type import AnyNBTType
from shadenbt.nbt_types.bool_nbt_type import BoolNBTType
from shadenbt.nbt_types.bytes_nbt_type import BlobNBTType, BytesNBTType
from shadenbt.nbt_types.collection_nbt_type import DequeNBTType, FrozenSetNBTType, ListNBTType, SetNBTType
from shadenbt.nbt_types.dataclass_nbt_type import DataclassNBTType, RecordNBTType
from shadenbt.nbt_types.enum_nbt_type import EnumNBTType
from shadenbt.nbt_types.float_nbt_type import Float32NBTType, Float64NBTType
from shadenbt.nbt_types.map_nbt_type import DictNBTType
from shadenbt.nbt_types.namedtuple_nbt_type import NamedTupleNBTType
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.nbt_types.null_nbt_type import NullNBTType
from shadenbt.nbt_types.optional_nbt_type import OptionalNBTType
from shadenbt.nbt_types.sized_int_nbt_type import (
    Int8NBTType,
    Int16NBTType,
    Int32NBTType,
    Int64NBTType,
    Int128NBTType,
    Uint8NBTType,
    Uint16NBTType,
    Uint32NBTType,
    Uint64NBTType,
)
from shadenbt.nbt_types.str_nbt_type import CharNBTType, StrNBTType
from shadenbt.nbt_types.tuple_nbt_type import TupleNBTType
from shadenbt.nbt_types.union_nbt_type import DataclassUnionNBTType
from shadenbt.nbt_types.utils import Dataclass, DataclassUnion, TypeAliasMap, TypeToNBTTypeMap
from shadenbt.types import F32, F64, I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, Char
from shadenbt.values import Byte, Double, Float, Int, Long, Short

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'TYPE_TO_NBT_TYPE_MAP',
    'AnyNBTType',
    'BlobNBTType',
    'BoolNBTType',
    'BytesNBTType',
    'CharNBTType',
    'DataclassNBTType',
    'DataclassUnionNBTType',
    'DequeNBTType',
    'DictNBTType',
    'EnumNBTType',
    'Float32NBTType',
    'Float64NBTType',
    'FrozenSetNBTType',
    'Int8NBTType',
    'Int16NBTType',
    'Int32NBTType',
    'Int64NBTType',
    'Int128NBTType',
    'ListNBTType',
    'NBTType',
    'NamedTupleNBTType',
    'NullNBTType',
    'OptionalNBTType',
    'RecordNBTType',
    'SetNBTType',
    'StrNBTType',
    'TupleNBTType',
    'TypeAliasMap',
    'TypeToNBTTypeMap',
    'Uint8NBTType',
    'Uint16NBTType',
    'Uint32NBTType',
    'Uint64NBTType',
    'make_nbt_type',
]

T = TypeVar('T')

DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    OrderedDict: dict,
}

# Mapping between types and NBTType classes.
TYPE_TO_NBT_TYPE_MAP: TypeToNBTTypeMap = {
    # builtin types:
    bool: BoolNBTType,
    bytearray: BytesNBTType,
    bytes: BytesNBTType,
    dict: DictNBTType,
    float: Float64NBTType,
    frozenset: FrozenSetNBTType,
    int: Int64NBTType,
    list: ListNBTType,
    set: SetNBTType,
    str: StrNBTType,
    tuple: TupleNBTType,
    # other Python types:
    Annotated: BlobNBTType,
    Any: AnyNBTType,
    Dataclass: DataclassNBTType,
    DataclassUnion: DataclassUnionNBTType,
    Enum: EnumNBTType,
    NamedTuple: NamedTupleNBTType,
    UnionType: OptionalNBTType,
    deque: DequeNBTType,
    # XXX: technically None is not a type, type[None]/NoneType is, both can show up in annotations
    None: NullNBTType,
    NoneType: NullNBTType,
    # width annotations:
    I8: Int8NBTType,
    U8: Uint8NBTType,
    I16: Int16NBTType,
    U16: Uint16NBTType,
    I32: Int32NBTType,
    U32: Uint32NBTType,
    I64: Int64NBTType,
    U64: Uint64NBTType,
    I128: Int128NBTType,
    U128: Int128NBTType,
    F32: Float32NBTType,
    F64: Float64NBTType,
    Char: CharNBTType,
    # width-carrying values:
    Byte: Int8NBTType,
    Short: Int16NBTType,
    Int: Int32NBTType,
    Long: Int64NBTType,
    Float: Float32NBTType,
    Double: Float64NBTType,
}

DEFAULT_TYPE_MAP = NBTType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, TYPE_TO_NBT_TYPE_MAP)


def make_nbt_type(type_: type[T], /) -> NBTType[T]:
    """ Like NBTType.from_type, but with the default maps.

    If you need to customize the mapping use `NBTType.from_type` instead.

    >>> make_nbt_type(dict[str, list[int]]).to_bytes({'a': [1]}).hex()
    'ad4e4254000480090100610401000000010000000000000000'
    """
    return NBTType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
