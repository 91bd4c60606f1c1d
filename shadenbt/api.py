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

"""
Encode values to complete ShadeNBT documents and decode them back.

Every function takes an optional `type_`. When it's given, the value is traversed with the schema built from it
(`make_nbt_type(type_)`), otherwise the framing is picked from the value at runtime and decoding produces a tree of
builtins and `shadenbt.values` wrappers.

>>> from shadenbt.values import Byte
>>> data = to_bytes({'x': Byte(5)})
>>> data.hex()
'ad4e4254000480010100780500'
>>> from_bytes(data)
{'x': Byte(5)}
"""

from typing import Any, BinaryIO, Optional, TypeVar, overload

from shadenbt.conf.get_settings import get_global_settings
from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types import AnyNBTType, NBTType, make_nbt_type
from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.types import Buffer

T = TypeVar('T')

_ANY_NBT_TYPE = AnyNBTType()


def _get_nbt_type(type_: Optional[type[T]]) -> NBTType[Any]:
    if type_ is None:
        return _ANY_NBT_TYPE
    return make_nbt_type(type_)


def _get_max_decode_bytes(max_bytes: Optional[int]) -> Optional[int]:
    if max_bytes is not None:
        return max_bytes
    return get_global_settings().MAX_DECODE_BYTES


def encode(serializer: Serializer, value: Any, type_: Optional[type[T]] = None) -> None:
    """ Write a complete document (header and root value) to the given serializer.
    """
    _get_nbt_type(type_).write_document(NBTEncoder(serializer), value)


@overload
def decode(deserializer: Deserializer, type_: None = None) -> Any:
    ...


@overload
def decode(deserializer: Deserializer, type_: type[T]) -> T:
    ...


def decode(deserializer: Deserializer, type_: Optional[type[T]] = None) -> Any:
    """ Read a complete document (header and root value) from the given deserializer.

    Nothing after the root value is read.
    """
    return _get_nbt_type(type_).read_document(NBTDecoder(deserializer))


def to_bytes(value: Any, type_: Optional[type[T]] = None, *, max_bytes: Optional[int] = None) -> bytes:
    """ Encode `value` into a new `bytes` object.
    """
    serializer = Serializer.build_bytes_serializer()
    encode(serializer.limited(max_bytes), value, type_)
    return bytes(serializer.finalize())


def to_writer(
    writer: BinaryIO,
    value: Any,
    type_: Optional[type[T]] = None,
    *,
    max_bytes: Optional[int] = None,
) -> None:
    """ Encode `value` into a binary file-like object, which is neither flushed nor closed.
    """
    serializer = Serializer.build_stream_serializer(writer)
    encode(serializer.limited(max_bytes), value, type_)


@overload
def from_bytes(data: Buffer, type_: None = None, *, max_bytes: Optional[int] = None) -> Any:
    ...


@overload
def from_bytes(data: Buffer, type_: type[T], *, max_bytes: Optional[int] = None) -> T:
    ...


def from_bytes(data: Buffer, type_: Optional[type[T]] = None, *, max_bytes: Optional[int] = None) -> Any:
    """ Decode a document that takes the whole buffer, trailing bytes are an error.
    """
    deserializer = Deserializer.build_bytes_deserializer(data)
    value = decode(deserializer.limited(_get_max_decode_bytes(max_bytes)), type_)
    deserializer.finalize()
    return value


@overload
def from_reader(reader: BinaryIO, type_: None = None, *, max_bytes: Optional[int] = None) -> Any:
    ...


@overload
def from_reader(reader: BinaryIO, type_: type[T], *, max_bytes: Optional[int] = None) -> T:
    ...


def from_reader(reader: BinaryIO, type_: Optional[type[T]] = None, *, max_bytes: Optional[int] = None) -> Any:
    """ Decode one document from a binary file-like object.

    Only the bytes of the document are consumed (apart from what the reader buffers on its own), so more data can
    follow it in the stream.
    """
    deserializer = Deserializer.build_stream_deserializer(reader)
    return decode(deserializer.limited(_get_max_decode_bytes(max_bytes)), type_)
