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


from typing import Generic, TypeVar

from typing_extensions import override

from shadenbt.serialization.deserializer import Deserializer
from shadenbt.serialization.exceptions import SerializationError
from shadenbt.serialization.serializer import Serializer

from ..types import Buffer

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesExceededError(SerializationError):
    """ Raised when the adapted serializer reached its maximum bytes write/read.

    The whole (de)serialization must be considered failed after this, the adapted serializer stopped at an arbitrary
    point of a value and cannot be resumed.
    """


class _Budget:
    __slots__ = ('left',)

    def __init__(self, max_bytes: int) -> None:
        if max_bytes < 0:
            raise ValueError('max_bytes cannot be negative')
        self.left = max_bytes

    def spend(self, n: int, action: str) -> None:
        if n > self.left:
            raise MaxBytesExceededError(f'{action} of {n} bytes exceeds the limit, {self.left} bytes left')
        self.left -= n


class MaxBytesSerializer(Serializer, Generic[S]):
    """Refuses any write that would take the total past `max_bytes`, the refused write reaches nothing."""

    def __init__(self, serializer: S, max_bytes: int) -> None:
        self.inner = serializer
        self._budget = _Budget(max_bytes)

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        self._budget.spend(view.nbytes, 'write')
        self.inner.write_bytes(view)

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()


class MaxBytesDeserializer(Deserializer, Generic[D]):
    """Refuses any read that would take the total past `max_bytes`, peeking is free."""

    def __init__(self, deserializer: D, max_bytes: int) -> None:
        self.inner = deserializer
        self._budget = _Budget(max_bytes)

    @override
    def is_empty(self) -> bool:
        return self.inner.is_empty()

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        return self.inner.peek_bytes(n, exact=exact)

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        if not exact:
            # only what is actually there counts against the limit
            n = len(self.inner.peek_bytes(n, exact=False))
        self._budget.spend(n, 'read')
        return self.inner.read_bytes(n, exact=exact)

    @override
    def finalize(self) -> None:
        self.inner.finalize()
