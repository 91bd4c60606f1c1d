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

from enum import IntEnum
from typing import Any, Optional

from shadenbt.serialization.exceptions import UnrecognizedTagError


class Tag(IntEnum):
    """ The one-byte kind code written before named fields and sequence elements.

    Signed integers share the tag of the unsigned integer of the same width, the sign is only known by whoever
    reads the value.
    """
    END = 0x00
    U8 = 0x01
    U16 = 0x02
    U32 = 0x03
    U64 = 0x04
    F32 = 0x05
    F64 = 0x06
    BLOB = 0x07
    STRING = 0x08
    SEQUENCE = 0x09
    COMPOUND = 0x0A

    @classmethod
    def _missing_(cls, value: Any) -> None:
        raise UnrecognizedTagError(f'unrecognized tag: {value!r}')

    @classmethod
    def from_byte(cls, value: int) -> 'Tag':
        """ Same as `Tag(value)`, it's here to make call sites read better.

        >>> Tag.from_byte(0x0a)
        <Tag.COMPOUND: 10>
        >>> Tag.from_byte(0x0b)
        Traceback (most recent call last):
        ...
        shadenbt.serialization.exceptions.UnrecognizedTagError: unrecognized tag: 11
        """
        return cls(value)

    @classmethod
    def for_int(cls, length: int) -> 'Tag':
        """ The tag of an integer that is `length` bytes wide.

        >>> Tag.for_int(4)
        <Tag.U32: 3>
        """
        tag = _INT_TAGS.get(length)
        if tag is None:
            raise ValueError(f'no tag for {length}-byte integers')
        return tag

    @property
    def int_length(self) -> Optional[int]:
        """ Width in bytes of the integer this tag carries, `None` for non-integer tags.
        """
        return _INT_LENGTHS.get(self)

    @property
    def float_length(self) -> Optional[int]:
        return _FLOAT_LENGTHS.get(self)

    @property
    def is_value(self) -> bool:
        """ Whether a value can carry this tag, `END` is only ever a marker.
        """
        return self is not Tag.END


_INT_LENGTHS: dict[Tag, int] = {
    Tag.U8: 1,
    Tag.U16: 2,
    Tag.U32: 4,
    Tag.U64: 8,
}

_INT_TAGS: dict[int, Tag] = {length: tag for tag, length in _INT_LENGTHS.items()}

_FLOAT_LENGTHS: dict[Tag, int] = {
    Tag.F32: 4,
    Tag.F64: 8,
}
