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

from typing import Annotated, Callable

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.exceptions import (
    SerializationTypeError,
    SerializationValueError,
    UnsupportedValueKindError,
)
from shadenbt.types import BlobSize
from shadenbt.utils.typing import get_args, get_origin, is_subclass


class BytesNBTType(NBTType[bytes]):
    """ Represents `bytes` and `bytearray` values, written as a sequence of `U8`.
    """

    __slots__ = ('_build',)

    _build: Callable[[bytes], bytes]

    def __init__(self, build: Callable[[bytes], bytes] = bytes) -> None:
        self._build = build

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: NBTType.TypeMap) -> Self:
        if is_subclass(type_, bytearray):
            return cls(bytearray)
        if not is_subclass(type_, bytes):
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise SerializationTypeError('expected bytes-like')

    @override
    def _serialize(self, encoder: NBTEncoder, value: bytes, /) -> None:
        encoder.visit_byte_sequence(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> bytes:
        return self._build(decoder.read_byte_sequence())


class BlobNBTType(NBTType[bytes]):
    """ Represents `Annotated[bytes, BlobSize(n)]`, exactly `n` raw bytes without a length on the wire.
    """

    __slots__ = ('_size',)

    _size: int

    def __init__(self, size: int) -> None:
        self._size = size

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: NBTType.TypeMap) -> Self:
        if get_origin(type_) is not Annotated:
            raise TypeError('expected Annotated[bytes, BlobSize(n)]')
        base_type, *metadata = get_args(type_)
        if not is_subclass(base_type, bytes):
            raise TypeError('only bytes can be annotated with BlobSize')
        sizes = [i for i in metadata if isinstance(i, BlobSize)]
        if len(sizes) != 1:
            raise UnsupportedValueKindError(f'Annotated is only supported with exactly one BlobSize, got {metadata}')
        blob_size, = sizes
        return cls(blob_size.size)

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise SerializationTypeError('expected bytes-like')
        if len(value) != self._size:
            raise SerializationValueError(f'expected {self._size} bytes, got {len(value)}')

    @override
    def _serialize(self, encoder: NBTEncoder, value: bytes, /) -> None:
        encoder.visit_blob(value)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> bytes:
        return decoder.read_blob(self._size)
