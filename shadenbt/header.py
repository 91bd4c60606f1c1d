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
Every ShadeNBT document starts with a 7-byte header: the magic and version, then one byte of flags.

>>> se = Serializer.build_bytes_serializer()
>>> write_header(se)
>>> bytes(se.finalize()).hex()
'ad4e4254000480'

>>> read_header(Deserializer.build_bytes_deserializer(bytes.fromhex('ad4e4254000480')))
128

Any difference in the magic or version is rejected, no matter what comes after it:

>>> read_header(Deserializer.build_bytes_deserializer(bytes.fromhex('ad4e4254000580')))
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.InvalidHeaderError: invalid header: ad4e42540005
"""

from shadenbt.consts import HEADER_FLAGS, HEADER_FLAGS_HIGH_BIT, HEADER_MAGIC
from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.exceptions import InvalidHeaderError, UnexpectedEndOfInputError


def write_header(serializer: Serializer) -> None:
    serializer.write_bytes(HEADER_MAGIC)
    serializer.write_byte(HEADER_FLAGS)


def read_header(deserializer: Deserializer) -> int:
    """ Validate the magic and version and return the flags byte.

    A source that ends before the magic is complete is only reported as truncated when the bytes it does have match,
    otherwise it's an invalid header.
    """
    magic = bytes(deserializer.read_bytes(len(HEADER_MAGIC), exact=False))
    if magic != HEADER_MAGIC[:len(magic)]:
        raise InvalidHeaderError(f'invalid header: {magic.hex()}')
    if len(magic) < len(HEADER_MAGIC):
        raise UnexpectedEndOfInputError(f'header truncated after {len(magic)} bytes')
    return deserializer.read_byte()


def has_high_bit(flags: int) -> bool:
    return bool(flags & HEADER_FLAGS_HIGH_BIT)
