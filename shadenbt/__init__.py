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
ShadeNBT, a tagged binary format for trees of named values.

This module exports the functions and types meant to be used by applications, the rest is reachable through the
submodules.
"""

from shadenbt.api import decode, encode, from_bytes, from_reader, to_bytes, to_writer
from shadenbt.exception import InvalidSettingsError, ShadeNBTError
from shadenbt.nbt_types import NBTType, make_nbt_type
from shadenbt.serialization.exceptions import SerializationError
from shadenbt.tag import Tag
from shadenbt.types import F32, F64, I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, BlobSize, Char
from shadenbt.values import Byte, Double, Float, Int, Long, Short
from shadenbt.version import __version__

__all__ = [
    '__version__',
    'BlobSize',
    'Byte',
    'Char',
    'Double',
    'F32',
    'F64',
    'Float',
    'I8',
    'I16',
    'I32',
    'I64',
    'I128',
    'Int',
    'InvalidSettingsError',
    'Long',
    'NBTType',
    'SerializationError',
    'ShadeNBTError',
    'Short',
    'Tag',
    'U8',
    'U16',
    'U32',
    'U64',
    'U128',
    'decode',
    'encode',
    'from_bytes',
    'from_reader',
    'make_nbt_type',
    'to_bytes',
    'to_writer',
]
