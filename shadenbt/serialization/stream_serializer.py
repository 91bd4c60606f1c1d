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

from .exceptions import StreamIOError
from .serializer import Serializer
from .types import Buffer


class StreamSerializer(Serializer):
    """Sink that forwards every write to a binary file-like object.

    The stream is owned by the caller: it is neither flushed nor closed here.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._written = 0

    @override
    def cur_pos(self) -> int:
        return self._written

    @override
    def write_bytes(self, data: Buffer) -> None:
        pending = memoryview(data)
        while pending:
            try:
                count = self._stream.write(pending)
            except OSError as e:
                raise StreamIOError(f'write failed after {self._written} bytes') from e
            # raw streams may write less than asked for, non-blocking ones may return None
            if count is None:
                raise StreamIOError('stream is not ready for writing')
            self._written += count
            pending = pending[count:]
