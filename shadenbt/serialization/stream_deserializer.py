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


from typing import BinaryIO

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import StreamIOError, UnexpectedEndOfInputError


class StreamDeserializer(Deserializer):
    """Source that pulls bytes from a binary file-like object.

    Only what is needed to satisfy the current read is pulled from the stream (peeking keeps a small look-ahead
    buffer), so a value can be decoded from a stream that continues after it.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._lookahead = bytearray()
        self._eof = False

    def _buffered(self, n: int) -> int:
        """Pull from the stream until n bytes are buffered or it ends, returns how many are buffered."""
        while len(self._lookahead) < n and not self._eof:
            try:
                chunk = self._stream.read(n - len(self._lookahead))
            except OSError as e:
                raise StreamIOError('read failed') from e
            if chunk:
                self._lookahead += chunk
            else:
                self._eof = True
        return len(self._lookahead)

    @override
    def is_empty(self) -> bool:
        return self._buffered(1) == 0

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        available = self._buffered(n)
        if exact and available < n:
            raise UnexpectedEndOfInputError(f'expected {n} bytes, the stream ended after {available}')
        return bytes(self._lookahead[:n])

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        chunk = self.peek_bytes(n, exact=exact)
        del self._lookahead[:len(chunk)]
        return chunk
