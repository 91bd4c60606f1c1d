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
Exceptions raised while writing or reading ShadeNBT data, from the byte layer up to the tag framing.

Every exception here derives from `SerializationError`, so callers that only care about "the data could not be
written/read" can catch a single class.
"""

from shadenbt.exception import ShadeNBTError


class SerializationError(ShadeNBTError):
    """Base class for all (de)serialization failures."""
    pass


class UnexpectedEndOfInputError(SerializationError):
    """The source was exhausted in the middle of a value."""
    pass


class TrailingDataError(SerializationError):
    """The source still had bytes after the value was fully decoded."""
    pass


class StreamIOError(SerializationError):
    """The underlying sink or source failed, the original `OSError` is chained as the cause."""
    pass


class TooLongError(SerializationError):
    """A length does not fit the space reserved for it on the wire."""
    pass


class StringTranscodingError(SerializationError):
    """Text could not be converted to or from modified UTF-8."""
    pass


class BadDataError(SerializationError):
    """The bytes are well-formed at the byte level but describe an invalid value."""
    pass


class SerializationTypeError(SerializationError, TypeError):
    """A value given for serialization does not have the expected Python type."""
    pass


class SerializationValueError(SerializationError, ValueError):
    """A value given for serialization has the expected Python type but an invalid content."""
    pass


class ValueOutOfRangeError(SerializationValueError):
    """A number does not fit the width it is being encoded with."""
    pass


class StringLengthOverflowError(TooLongError):
    """A field name does not fit in the 2-byte length prefix."""
    pass


class SequenceLengthOverflowError(TooLongError):
    """A sequence has more elements than a 4-byte signed count can express."""
    pass


class InvalidHeaderError(SerializationError):
    """The leading bytes of the source are not the ShadeNBT magic and version."""
    pass


class UnrecognizedTagError(SerializationError):
    """A tag byte that has no meaning in the tag table was read."""
    pass


class TagMismatchError(SerializationError):
    """The tag read from the source is not the one the value being reconstructed needs."""
    pass


class FieldObligationUnsetError(SerializationError):
    """A value was written or read with no pending root, field or sequence-element obligation.

    This is always a programming error in the code driving the encoder/decoder, never a data error.
    """
    pass


class FieldObligationPendingError(SerializationError):
    """A compound field or sequence element was announced but its value was never consumed."""
    pass


class UnsupportedValueKindError(SerializationError):
    """The value (or type) has no wire framing, for instance 128-bit integers or heterogeneous sequences."""
    pass


class NestingTooDeepError(SerializationError):
    """Compounds and sequences are nested deeper than the configured maximum depth."""
    pass
