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
Byte-level sinks and sources.

The sinks and sources know nothing about tags or framing, they only move bytes around: `Serializer` appends bytes to a
sink, `Deserializer` consumes bytes from a source. The NBT encoder/decoder are built on top of these.
"""

from .deserializer import Deserializer
from .exceptions import (
    BadDataError,
    FieldObligationPendingError,
    FieldObligationUnsetError,
    InvalidHeaderError,
    NestingTooDeepError,
    SequenceLengthOverflowError,
    SerializationError,
    SerializationTypeError,
    SerializationValueError,
    StreamIOError,
    StringLengthOverflowError,
    StringTranscodingError,
    TagMismatchError,
    TooLongError,
    TrailingDataError,
    UnexpectedEndOfInputError,
    UnrecognizedTagError,
    UnsupportedValueKindError,
    ValueOutOfRangeError,
)
from .serializer import Serializer

__all__ = [
    'BadDataError',
    'Deserializer',
    'FieldObligationPendingError',
    'FieldObligationUnsetError',
    'InvalidHeaderError',
    'NestingTooDeepError',
    'SequenceLengthOverflowError',
    'SerializationError',
    'SerializationTypeError',
    'SerializationValueError',
    'Serializer',
    'StreamIOError',
    'StringLengthOverflowError',
    'StringTranscodingError',
    'TagMismatchError',
    'TooLongError',
    'TrailingDataError',
    'UnexpectedEndOfInputError',
    'UnrecognizedTagError',
    'UnsupportedValueKindError',
    'ValueOutOfRangeError',
]
