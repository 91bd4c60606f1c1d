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
The encoder is the sink side of the visitor interface: value representations call its `visit_*` methods, it frames
each value according to the pending field obligation and writes the payload.

>>> se = Serializer.build_bytes_serializer()
>>> encoder = NBTEncoder(se, max_depth=8)
>>> encoder.write_header()
>>> encoder.obligate_root()
>>> with encoder.visit_compound() as compound:
...     compound.field('x', 5, NBTEncoder.visit_u8)
>>> bytes(se.finalize()).hex()
'ad4e4254000480010100780500'
"""

from __future__ import annotations

from types import TracebackType
from typing import Callable, Optional, TypeVar

from typing_extensions import Self

from shadenbt.consts import END_BYTE, MAX_SEQUENCE_LENGTH
from shadenbt.field_context import FieldContext, SequenceFrame
from shadenbt.header import write_header
from shadenbt.serialization import Serializer
from shadenbt.serialization.encoding.bool import encode_bool
from shadenbt.serialization.encoding.float import pack_float
from shadenbt.serialization.encoding.int import check_int_range, encode_int
from shadenbt.serialization.encoding.mutf8 import STRING_TERMINATOR, mutf8_encode
from shadenbt.serialization.exceptions import (
    FieldObligationPendingError,
    NestingTooDeepError,
    SequenceLengthOverflowError,
    SerializationError,
    SerializationValueError,
    UnsupportedValueKindError,
)
from shadenbt.serialization.types import Buffer
from shadenbt.tag import Tag

T = TypeVar('T')

# How a single value is handed to the encoder, `NBTType.serialize` and the `NBTEncoder.visit_*` methods fit this.
ValueWriter = Callable[['NBTEncoder', T], None]


class NBTEncoder:
    __slots__ = ('serializer', 'context', 'max_depth', '_depth')

    def __init__(self, serializer: Serializer, *, max_depth: Optional[int] = None) -> None:
        if max_depth is None:
            from shadenbt.conf.get_settings import get_global_settings
            max_depth = get_global_settings().MAX_DEPTH
        self.serializer = serializer
        self.context = FieldContext()
        self.max_depth = max_depth
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    def write_header(self) -> None:
        write_header(self.serializer)

    def obligate_root(self) -> None:
        self.context.obligate_root()

    def visit_int(self, value: int, *, length: int, signed: bool) -> None:
        check_int_range(value, length=length, signed=signed)
        self.context.discharge(Tag.for_int(length), self.serializer)
        encode_int(self.serializer, value, length=length, signed=signed)

    def visit_u8(self, value: int) -> None:
        self.visit_int(value, length=1, signed=False)

    def visit_u16(self, value: int) -> None:
        self.visit_int(value, length=2, signed=False)

    def visit_u32(self, value: int) -> None:
        self.visit_int(value, length=4, signed=False)

    def visit_u64(self, value: int) -> None:
        self.visit_int(value, length=8, signed=False)

    def visit_i8(self, value: int) -> None:
        self.visit_int(value, length=1, signed=True)

    def visit_i16(self, value: int) -> None:
        self.visit_int(value, length=2, signed=True)

    def visit_i32(self, value: int) -> None:
        self.visit_int(value, length=4, signed=True)

    def visit_i64(self, value: int) -> None:
        self.visit_int(value, length=8, signed=True)

    def visit_u128(self, value: int) -> None:
        raise UnsupportedValueKindError('128-bit integers have no tag')

    def visit_i128(self, value: int) -> None:
        raise UnsupportedValueKindError('128-bit integers have no tag')

    def visit_bool(self, value: bool) -> None:
        self.context.discharge(Tag.U8, self.serializer)
        encode_bool(self.serializer, value)

    def visit_f32(self, value: float) -> None:
        data = pack_float(value, length=4)
        self.context.discharge(Tag.F32, self.serializer)
        self.serializer.write_bytes(data)

    def visit_f64(self, value: float) -> None:
        data = pack_float(value, length=8)
        self.context.discharge(Tag.F64, self.serializer)
        self.serializer.write_bytes(data)

    def visit_char(self, value: str) -> None:
        if len(value) != 1:
            raise SerializationValueError(f'expected a single character, got {value!r}')
        self.visit_str(value)

    def visit_str(self, value: str) -> None:
        data = mutf8_encode(value)
        self.context.discharge(Tag.STRING, self.serializer)
        self.serializer.write_bytes(data)
        self.serializer.write_byte(STRING_TERMINATOR)

    def visit_blob(self, data: Buffer) -> None:
        """ Raw bytes without any length, whoever reads them must know how many there are.
        """
        self.context.discharge(Tag.BLOB, self.serializer)
        self.serializer.write_bytes(data)

    def visit_byte_sequence(self, data: Buffer) -> None:
        """ A sequence of `U8` written in one go, the result is the same as visiting each byte as an element.
        """
        length = len(data)
        _check_sequence_length(length)
        self._check_depth()
        self.context.discharge(Tag.SEQUENCE, self.serializer)
        self.context.obligate_sequence(SequenceFrame(length))
        self.context.discharge(Tag.U8 if length else Tag.END, self.serializer)
        self.serializer.write_bytes(data)

    def visit_unit(self) -> None:
        """ The unit value is an empty compound.
        """
        with self.visit_compound():
            pass

    def visit_sequence(self, length: Optional[int]) -> SequenceVisitor:
        """ Start a sequence, the elements are written through the returned visitor, which must be used in a `with`.

        The length is part of the framing that comes before the first element, so it must be known up front.
        """
        if length is None:
            raise UnsupportedValueKindError('sequences of unknown length are not supported')
        _check_sequence_length(length)
        self._check_depth()
        self.context.discharge(Tag.SEQUENCE, self.serializer)
        self._depth += 1
        return SequenceVisitor(self, length)

    def visit_compound(self) -> CompoundVisitor:
        """ Start a compound, the fields are written through the returned visitor, which must be used in a `with`.
        """
        self._check_depth()
        self.context.discharge(Tag.COMPOUND, self.serializer)
        self._depth += 1
        return CompoundVisitor(self)

    def _check_depth(self) -> None:
        if self._depth >= self.max_depth:
            raise NestingTooDeepError(f'nesting deeper than {self.max_depth} levels')

    def _leave(self) -> None:
        assert self._depth > 0
        self._depth -= 1

    def _write_value(self, value: T, write: ValueWriter[T]) -> None:
        write(self, value)
        if self.context.is_pending():
            raise FieldObligationPendingError('a value was announced but nothing was written for it')


class SequenceVisitor:
    __slots__ = ('_encoder', '_frame', '_length', '_visited')

    def __init__(self, encoder: NBTEncoder, length: int) -> None:
        self._encoder = encoder
        self._frame = SequenceFrame(length)
        self._length = length
        self._visited = 0

    def __enter__(self) -> Self:
        return self

    def element(self, value: T, write: ValueWriter[T]) -> None:
        if self._visited >= self._length:
            raise SerializationError(f'sequence declared with {self._length} elements, got more')
        self._encoder.context.obligate_sequence(self._frame)
        self._encoder._write_value(value, write)
        self._visited += 1

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self._encoder._leave()
        if exc_type is not None:
            return
        if self._visited != self._length:
            raise SerializationError(f'sequence declared with {self._length} elements, got {self._visited}')
        if self._length == 0:
            # an empty sequence still has its framing, with END as the element tag
            encoder = self._encoder
            encoder.context.obligate_sequence(self._frame)
            encoder.context.discharge(Tag.END, encoder.serializer)


class CompoundVisitor:
    __slots__ = ('_encoder',)

    def __init__(self, encoder: NBTEncoder) -> None:
        self._encoder = encoder

    def __enter__(self) -> Self:
        return self

    def field(self, name: str, value: T, write: ValueWriter[T]) -> None:
        self._encoder.context.obligate_named(name)
        self._encoder._write_value(value, write)

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self._encoder._leave()
        if exc_type is None:
            self._encoder.serializer.write_byte(END_BYTE)


def _check_sequence_length(length: int) -> None:
    if length < 0:
        raise SerializationValueError(f'negative sequence length: {length}')
    if length > MAX_SEQUENCE_LENGTH:
        raise SequenceLengthOverflowError(f'sequence of {length} elements, at most {MAX_SEQUENCE_LENGTH} are allowed')
