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
IEEE 754 floats, little-endian, 4 or 8 bytes.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 0000c03f
>>> encode_float(se, 1.5, length=8)  # writes 000000000000f83f
>>> bytes(se.finalize()).hex()
'0000c03f000000000000f83f'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000c03f000000000000f83f'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
1.5
>>> de.finalize()

Values that cannot be represented in single precision are rejected instead of becoming infinity:

>>> encode_float(Serializer.build_bytes_serializer(), 1e300, length=4)
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.ValueOutOfRangeError: 1e+300 does not fit in a 32-bit float
"""

import struct

from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.exceptions import ValueOutOfRangeError

_FORMATS = {
    4: 'f',
    8: 'd',
}


def _get_format(length: int) -> str:
    fmt = _FORMATS.get(length)
    if fmt is None:
        raise ValueError(f'unsupported float length: {length}')
    return fmt


def pack_float(value: float, *, length: int) -> bytes:
    """ Pack a float into its wire bytes, raising ValueOutOfRangeError when it does not fit.
    """
    try:
        return struct.pack('<' + _get_format(length), value)
    except OverflowError as e:
        raise ValueOutOfRangeError(f'{value!r} does not fit in a {length * 8}-bit float') from e


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    serializer.write_bytes(pack_float(value, length=length))


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    return deserializer.read_le(_get_format(length))
