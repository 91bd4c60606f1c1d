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

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, BinaryIO

from .exceptions import TrailingDataError
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesDeserializer
    from .bytes_deserializer import BytesDeserializer
    from .stream_deserializer import StreamDeserializer

_READ_ALL_CHUNK = 4096


class Deserializer(ABC):
    """A byte source, consumed strictly front to back.

    Implementations only provide `is_empty`, `peek_bytes` and `read_bytes`, everything else is derived from those.
    Running out of data is always an `UnexpectedEndOfInputError`, never a short result, unless `exact=False` is given.
    """

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @staticmethod
    def build_stream_deserializer(stream: BinaryIO) -> StreamDeserializer:
        from .stream_deserializer import StreamDeserializer
        return StreamDeserializer(stream)

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        raise NotImplementedError

    def peek_byte(self) -> int:
        return self.peek_bytes(1)[0]

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_all(self) -> Buffer:
        result = bytearray()
        while not self.is_empty():
            result += self.read_bytes(_READ_ALL_CHUNK, exact=False)
        return bytes(result)

    def read_until(self, terminator: int) -> bytes:
        """Read bytes up to the first `terminator` byte, which is consumed but not returned.

        Running out of data before the terminator is found is an error, it's never treated as an implicit terminator.
        """
        result = bytearray()
        while (byte := self.read_byte()) != terminator:
            result.append(byte)
        return bytes(result)

    def read_le(self, fmt: str) -> Any:
        """Read a single little-endian value described by the `struct` format character `fmt`."""
        layout = struct.Struct('<' + fmt)
        value, = layout.unpack(self.read_bytes(layout.size))
        return value

    def finalize(self) -> None:
        """Check that every byte was consumed."""
        if not self.is_empty():
            raise TrailingDataError('trailing data after the document')

    def limited(self, max_bytes: int | None) -> Deserializer | MaxBytesDeserializer:
        """Cap how many bytes can be read from here on, `None` means no cap and returns `self`."""
        if max_bytes is None:
            return self
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)
