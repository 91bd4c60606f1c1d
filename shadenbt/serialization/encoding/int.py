#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The encoding is little-endian two's complement, which means a signed value and its unsigned reinterpretation of the
same width produce the same bytes, the signedness only matters for range checking and for decoding.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 5, length=1, signed=False)  # writes 05
>>> encode_int(se, 1234, length=2, signed=True)  # writes d204
>>> encode_int(se, -1234, length=2, signed=True)  # writes 2efb
>>> encode_int(se, 1, length=4, signed=True)  # writes 01000000
>>> bytes(se.finalize()).hex()
'05d2042efb01000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('05d2042efb01000000'))
>>> decode_int(de, length=1, signed=False)  # reads 05
5
>>> decode_int(de, length=2, signed=True)  # reads d204
1234
>>> decode_int(de, length=2, signed=False)  # reads 2efb, same bytes as -1234
64302
>>> decode_int(de, length=4, signed=True)  # reads 01000000
1
>>> de.finalize()

>>> check_int_range(256, length=1, signed=False)
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.ValueOutOfRangeError: 256 does not fit in 8 bits unsigned
"""

from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.exceptions import ValueOutOfRangeError


def int_bounds(*, length: int, signed: bool) -> tuple[int, int]:
    """ Inclusive (lower, upper) bounds of an integer with the given byte-length and signedness.
    """
    bits = length * 8
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def check_int_range(number: int, *, length: int, signed: bool) -> None:
    lower, upper = int_bounds(length=length, signed=signed)
    if not lower <= number <= upper:
        signedness = 'signed' if signed else 'unsigned'
        raise ValueOutOfRangeError(f'{number} does not fit in {length * 8} bits {signedness}')


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This module's docstring has more details and examples.
    """
    check_int_range(number, length=length, signed=signed)
    serializer.write_bytes(int.to_bytes(number, length, byteorder='little', signed=signed))


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    """ Decode an int using the given byte-length and signedness.

    This module's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length)
    return int.from_bytes(data, byteorder='little', signed=signed)
