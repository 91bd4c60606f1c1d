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
Booleans are a single byte, 0 or 1, any other byte is rejected on decode.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, True)
>>> encode_bool(se, False)
>>> bytes(se.finalize()).hex()
'0100'

>>> de = Deserializer.build_bytes_deserializer(bytes([1, 0, 2]))
>>> decode_bool(de)
True
>>> decode_bool(de)
False
>>> decode_bool(de)
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.BadDataError: b'\\x02' is not a valid boolean
"""

from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.exceptions import BadDataError


def encode_bool(serializer: Serializer, value: bool) -> None:
    serializer.write_byte(0x01 if value else 0x00)


def decode_bool(deserializer: Deserializer) -> bool:
    i = deserializer.read_byte()
    if i == 0:
        return False
    elif i == 1:
        return True
    else:
        raise BadDataError(f'{bytes([i])!r} is not a valid boolean')
