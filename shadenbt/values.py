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
Scalars that remember their wire width.

Decoding without a schema can only rebuild what the tags say, so numbers come back as these wrappers instead of plain
`int`/`float`. They behave as the builtin they extend, and encoding them again produces the same tags.

>>> Byte(-3)
Byte(-3)
>>> Byte(200)
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.ValueOutOfRangeError: 200 does not fit in 8 bits signed
>>> Float(0.1) == 0.1
False
>>> Float(0.5) == 0.5
True
"""

import struct
from typing import ClassVar, SupportsFloat, SupportsIndex, Union

from shadenbt.serialization.encoding.float import pack_float
from shadenbt.serialization.encoding.int import check_int_range
from shadenbt.tag import Tag


class SizedInt(int):
    """ Base for signed integers of a fixed width.
    """
    __slots__ = ()

    LENGTH: ClassVar[int]
    TAG: ClassVar[Tag]

    def __new__(cls, value: Union[str, SupportsIndex] = 0) -> 'SizedInt':
        number = super().__new__(cls, value)
        check_int_range(int(number), length=cls.LENGTH, signed=True)
        return number

    def __repr__(self) -> str:
        return f'{type(self).__name__}({int(self)})'


class Byte(SizedInt):
    __slots__ = ()
    LENGTH = 1
    TAG = Tag.U8


class Short(SizedInt):
    __slots__ = ()
    LENGTH = 2
    TAG = Tag.U16


class Int(SizedInt):
    __slots__ = ()
    LENGTH = 4
    TAG = Tag.U32


class Long(SizedInt):
    __slots__ = ()
    LENGTH = 8
    TAG = Tag.U64


class SizedFloat(float):
    __slots__ = ()

    LENGTH: ClassVar[int]
    TAG: ClassVar[Tag]

    def __repr__(self) -> str:
        return f'{type(self).__name__}({float(self)!r})'


class Float(SizedFloat):
    """ Single precision, the value is rounded when the wrapper is created so it's the one that is read back.
    """
    __slots__ = ()
    LENGTH = 4
    TAG = Tag.F32

    def __new__(cls, value: Union[str, SupportsFloat, SupportsIndex] = 0.0) -> 'Float':
        rounded, = struct.unpack('<f', pack_float(float(value), length=4))
        return super().__new__(cls, rounded)


class Double(SizedFloat):
    __slots__ = ()
    LENGTH = 8
    TAG = Tag.F64


SIZED_INTS: tuple[type[SizedInt], ...] = (Byte, Short, Int, Long)
