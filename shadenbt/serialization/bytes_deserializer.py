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


from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import UnexpectedEndOfInputError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """Source over an in-memory buffer.

    The input is frozen into `bytes` once (no copy when it already is `bytes`), reads return views into it.
    """

    def __init__(self, data: Buffer) -> None:
        self._data = bytes(data)
        self._view = memoryview(self._data)
        self._offset = 0

    def _remaining(self) -> int:
        return len(self._view) - self._offset

    @override
    def is_empty(self) -> bool:
        return self._offset >= len(self._view)

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        if exact and self._remaining() < n:
            raise UnexpectedEndOfInputError(f'expected {n} bytes, only {self._remaining()} left')
        return self._view[self._offset:self._offset + n]

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        chunk = self.peek_bytes(n, exact=exact)
        self._offset += len(chunk)
        return chunk

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise UnexpectedEndOfInputError('not enough bytes to read')
        return self._view[self._offset]

    @override
    def read_byte(self) -> int:
        byte = self.peek_byte()
        self._offset += 1
        return byte

    @override
    def read_all(self) -> memoryview:
        return self.read_bytes(self._remaining())

    @override
    def read_until(self, terminator: int) -> bytes:
        end = self._data.find(terminator, self._offset)
        if end < 0:
            raise UnexpectedEndOfInputError(f'terminator {terminator:#04x} not found')
        result = self._data[self._offset:end]
        self._offset = end + 1
        return result
