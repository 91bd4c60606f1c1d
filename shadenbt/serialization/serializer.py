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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, BinaryIO

from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesSerializer
    from .bytes_serializer import BytesSerializer
    from .stream_serializer import StreamSerializer


class Serializer(ABC):
    """A byte sink.

    Encoders only ever append, there is no seeking, so any implementation that can append bytes in order is usable.
    Implementations provide `write_bytes` and `cur_pos`.
    """

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_stream_serializer(stream: BinaryIO) -> StreamSerializer:
        from .stream_serializer import StreamSerializer
        return StreamSerializer(stream)

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes written so far."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        raise NotImplementedError

    def write_byte(self, data: int) -> None:
        # bytes() rejects values outside 0..255
        self.write_bytes(bytes((data,)))

    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be reused after this."""
        raise TypeError(f'{type(self).__name__} does not hold its output')

    def limited(self, max_bytes: int | None) -> Serializer | MaxBytesSerializer:
        """Cap how many bytes can be written from here on, `None` means no cap and returns `self`."""
        if max_bytes is None:
            return self
        from .adapters import MaxBytesSerializer
        return MaxBytesSerializer(self, max_bytes)
