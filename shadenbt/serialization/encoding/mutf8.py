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
Modified UTF-8 text, in two layouts.

Modified UTF-8 differs from standard UTF-8 in that U+0000 is written as the two bytes `c0 80` and characters outside
the BMP are written as a surrogate pair of 3-byte sequences. Because of the first property the encoded text never
contains a zero byte, which makes `00` usable as a terminator. String payloads use it:

>>> se = Serializer.build_bytes_serializer()
>>> encode_mutf8(se, 'hi')  # writes 6869 00
>>> encode_mutf8(se, 'A\\x00')  # writes 41c080 00
>>> bytes(se.finalize()).hex()
'68690041c08000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('68690041c08000'))
>>> decode_mutf8(de)
'hi'
>>> decode_mutf8(de)
'A\\x00'
>>> de.finalize()

Field names are instead prefixed by their encoded length as a 2-byte little-endian unsigned integer:

>>> se = Serializer.build_bytes_serializer()
>>> encode_mutf8_name(se, mutf8_encode('x'))
>>> bytes(se.finalize()).hex()
'010078'
>>> decode_mutf8_name(Deserializer.build_bytes_deserializer(bytes.fromhex('010078')))
'x'

>>> encode_mutf8_name(Serializer.build_bytes_serializer(), b'a' * 65536)
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.StringLengthOverflowError: name is 65536 bytes long, at most 65535 are allowed
"""

from mutf8 import decode_modified_utf8, encode_modified_utf8

from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.encoding.int import decode_int, encode_int
from shadenbt.serialization.exceptions import StringLengthOverflowError, StringTranscodingError
from shadenbt.serialization.types import Buffer

STRING_TERMINATOR = 0x00
NAME_LENGTH_SIZE = 2
MAX_NAME_LENGTH = (1 << (NAME_LENGTH_SIZE * 8)) - 1


def mutf8_encode(text: str) -> bytes:
    """ Convert text to modified UTF-8, raising StringTranscodingError for text that can't be represented.
    """
    try:
        return encode_modified_utf8(text)
    except UnicodeError as e:
        raise StringTranscodingError(f'cannot encode {text!r} as modified UTF-8') from e


def mutf8_decode(data: Buffer) -> str:
    """ Convert modified UTF-8 back to text, raising StringTranscodingError for invalid byte sequences.
    """
    raw = bytes(data)
    try:
        return decode_modified_utf8(raw)
    except UnicodeError as e:
        raise StringTranscodingError(f'invalid modified UTF-8: {raw!r}') from e


def check_name_length(encoded: Buffer) -> None:
    length = len(encoded)
    if length > MAX_NAME_LENGTH:
        raise StringLengthOverflowError(f'name is {length} bytes long, at most {MAX_NAME_LENGTH} are allowed')


def encode_mutf8(serializer: Serializer, text: str) -> None:
    serializer.write_bytes(mutf8_encode(text))
    serializer.write_byte(STRING_TERMINATOR)


def decode_mutf8(deserializer: Deserializer) -> str:
    return mutf8_decode(deserializer.read_until(STRING_TERMINATOR))


def encode_mutf8_name(serializer: Serializer, encoded: Buffer) -> None:
    """ Write an already encoded name with its length prefix.

    The length is checked before anything is written.
    """
    check_name_length(encoded)
    encode_int(serializer, len(encoded), length=NAME_LENGTH_SIZE, signed=False)
    serializer.write_bytes(encoded)


def decode_mutf8_name(deserializer: Deserializer) -> str:
    length = decode_int(deserializer, length=NAME_LENGTH_SIZE, signed=False)
    return mutf8_decode(deserializer.read_bytes(length))
