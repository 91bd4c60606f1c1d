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
The decoder is the source side of the visitor interface: value representations ask it for the value they expect
and it checks that against the tag that announced the value.

>>> data = bytes.fromhex('ad4e4254000480' '01010078' '05' '00')
>>> decoder = NBTDecoder(Deserializer.build_bytes_deserializer(data), max_depth=8)
>>> decoder.read_header()
128
>>> decoder.begin_root()
>>> with decoder.read_compound() as fields:
...     for name in fields:
...         print(name, decoder.read_u8())
x 5

Without a schema the tags are enough to rebuild a tree of builtins and width-carrying wrappers:

>>> decoder = NBTDecoder(Deserializer.build_bytes_deserializer(data), max_depth=8)
>>> decoder.read_header()
128
>>> decoder.begin_root()
>>> decoder.read_any()
{'x': Byte(5)}
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Iterator, Optional

from structlog import get_logger
from typing_extensions import Self

from shadenbt.consts import END_BYTE, SEQUENCE_COUNT_SIZE
from shadenbt.field_context import ReadContext
from shadenbt.header import has_high_bit, read_header
from shadenbt.serialization import Deserializer
from shadenbt.serialization.encoding.bool import decode_bool
from shadenbt.serialization.encoding.float import decode_float
from shadenbt.serialization.encoding.int import decode_int
from shadenbt.serialization.encoding.mutf8 import STRING_TERMINATOR, decode_mutf8, decode_mutf8_name
from shadenbt.serialization.exceptions import (
    BadDataError,
    FieldObligationPendingError,
    NestingTooDeepError,
    UnsupportedValueKindError,
)
from shadenbt.tag import Tag
from shadenbt.values import Byte, Double, Float, Int, Long, Short, SizedInt

logger = get_logger()

_ANY_INTS: dict[Tag, type[SizedInt]] = {
    Tag.U8: Byte,
    Tag.U16: Short,
    Tag.U32: Int,
    Tag.U64: Long,
}


class NBTDecoder:
    def __init__(self, deserializer: Deserializer, *, max_depth: Optional[int] = None) -> None:
        if max_depth is None:
            from shadenbt.conf.get_settings import get_global_settings
            max_depth = get_global_settings().MAX_DEPTH
        self.log = logger.new()
        self.deserializer = deserializer
        self.context = ReadContext()
        self.max_depth = max_depth
        self.flags: Optional[int] = None
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def flags_high_bit(self) -> bool:
        """ Whether the high bit of the header flags is set, the flags must have been read already.
        """
        assert self.flags is not None, 'header not read yet'
        return has_high_bit(self.flags)

    def read_header(self) -> int:
        flags = read_header(self.deserializer)
        self.flags = flags
        self.log.debug('header read', flags=flags, high_bit=has_high_bit(flags))
        return flags

    def begin_root(self) -> None:
        self.context.set_root()

    def expect(self, tag: Tag) -> None:
        self.context.expect(tag)

    def pending_tag(self, default: Tag = Tag.COMPOUND) -> Tag:
        """ The tag of the value that comes next, at the root (where there's no tag) `default` is returned.
        """
        tag = self.context.peek()
        return default if tag is None else tag

    def read_int(self, *, length: int, signed: bool) -> int:
        self.expect(Tag.for_int(length))
        return decode_int(self.deserializer, length=length, signed=signed)

    def read_u8(self) -> int:
        return self.read_int(length=1, signed=False)

    def read_u16(self) -> int:
        return self.read_int(length=2, signed=False)

    def read_u32(self) -> int:
        return self.read_int(length=4, signed=False)

    def read_u64(self) -> int:
        return self.read_int(length=8, signed=False)

    def read_i8(self) -> int:
        return self.read_int(length=1, signed=True)

    def read_i16(self) -> int:
        return self.read_int(length=2, signed=True)

    def read_i32(self) -> int:
        return self.read_int(length=4, signed=True)

    def read_i64(self) -> int:
        return self.read_int(length=8, signed=True)

    def read_u128(self) -> int:
        raise UnsupportedValueKindError('128-bit integers have no tag')

    def read_i128(self) -> int:
        raise UnsupportedValueKindError('128-bit integers have no tag')

    def read_bool(self) -> bool:
        self.expect(Tag.U8)
        return decode_bool(self.deserializer)

    def read_f32(self) -> float:
        self.expect(Tag.F32)
        return decode_float(self.deserializer, length=4)

    def read_f64(self) -> float:
        self.expect(Tag.F64)
        return decode_float(self.deserializer, length=8)

    def read_str(self) -> str:
        self.expect(Tag.STRING)
        return decode_mutf8(self.deserializer)

    def read_char(self) -> str:
        value = self.read_str()
        if len(value) != 1:
            raise BadDataError(f'expected a single character, got {value!r}')
        return value

    def read_blob(self, size: int) -> bytes:
        self.expect(Tag.BLOB)
        return bytes(self.deserializer.read_bytes(size))

    def read_byte_sequence(self) -> bytes:
        with self.read_sequence() as elements:
            return bytes(self.read_u8() for _ in elements)

    def read_unit(self) -> None:
        """ The unit value is an empty compound, fields that are there anyway are skipped.
        """
        with self.read_compound() as fields:
            for name in fields:
                self.log.debug('skipping field of unit value', name=name)
                self.skip()

    def read_sequence(self) -> SequenceReader:
        """ Read the framing of a sequence, the elements are read by iterating the returned reader inside a `with`.
        """
        self._check_depth()
        self.expect(Tag.SEQUENCE)
        tag_byte = self.deserializer.read_byte()
        count = decode_int(self.deserializer, length=SEQUENCE_COUNT_SIZE, signed=True)
        if count < 0:
            raise BadDataError(f'negative sequence count: {count}')
        if count == 0:
            # the element tag of an empty sequence carries no information
            element_tag = Tag.END
        else:
            element_tag = Tag.from_byte(tag_byte)
            if element_tag is Tag.END:
                raise BadDataError(f'sequence of {count} elements tagged END')
        self._depth += 1
        return SequenceReader(self, element_tag, count)

    def read_compound(self) -> CompoundReader:
        """ Start reading a compound, iterating the returned reader inside a `with` yields the field names.

        For each name the field's value must be read (or skipped) before asking for the next one.
        """
        self._check_depth()
        self.expect(Tag.COMPOUND)
        self._depth += 1
        return CompoundReader(self)

    def read_any(self) -> Any:
        """ Read the pending value using only its tag, blobs can't be read this way because their size is unknown.
        """
        tag = self.pending_tag()
        int_type = _ANY_INTS.get(tag)
        if int_type is not None:
            return int_type(self.read_int(length=int_type.LENGTH, signed=True))
        elif tag is Tag.F32:
            return Float(self.read_f32())
        elif tag is Tag.F64:
            return Double(self.read_f64())
        elif tag is Tag.STRING:
            return self.read_str()
        elif tag is Tag.SEQUENCE:
            with self.read_sequence() as elements:
                return [self.read_any() for _ in elements]
        elif tag is Tag.COMPOUND:
            result: dict[str, Any] = {}
            with self.read_compound() as fields:
                for name in fields:
                    result[name] = self.read_any()
            return result
        else:
            raise UnsupportedValueKindError(f'cannot read a {tag.name} value without a schema')

    def skip(self) -> None:
        """ Read and discard the pending value.
        """
        tag = self.pending_tag()
        if tag.int_length is not None or tag.float_length is not None:
            self.expect(tag)
            self.deserializer.read_bytes(tag.int_length or tag.float_length or 0)
        elif tag is Tag.STRING:
            self.expect(tag)
            self.deserializer.read_until(STRING_TERMINATOR)
        elif tag is Tag.SEQUENCE:
            with self.read_sequence() as elements:
                for _ in elements:
                    self.skip()
        elif tag is Tag.COMPOUND:
            with self.read_compound() as fields:
                for _ in fields:
                    self.skip()
        else:
            raise UnsupportedValueKindError(f'cannot skip a {tag.name} value without a schema')

    def _check_depth(self) -> None:
        if self._depth >= self.max_depth:
            raise NestingTooDeepError(f'nesting deeper than {self.max_depth} levels')

    def _leave(self) -> None:
        assert self._depth > 0
        self._depth -= 1


class SequenceReader:
    """ Iterating yields the index of each element, with the element's tag pending in the decoder.

    Each element must be read (or skipped) before the next one is yielded.
    """

    __slots__ = ('_decoder', 'element_tag', '_count', '_yielded')

    def __init__(self, decoder: NBTDecoder, element_tag: Tag, count: int) -> None:
        self._decoder = decoder
        self.element_tag = element_tag
        self._count = count
        self._yielded = 0

    def __len__(self) -> int:
        return self._count

    def __enter__(self) -> Self:
        return self

    def __iter__(self) -> Iterator[int]:
        context = self._decoder.context
        while self._yielded < self._count:
            self._check_consumed()
            context.set_tagged(self.element_tag)
            self._yielded += 1
            yield self._yielded - 1

    def _check_consumed(self) -> None:
        if self._decoder.context.is_pending():
            raise FieldObligationPendingError(f'sequence element {self._yielded - 1} was not read')

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self._decoder._leave()
        if exc_type is not None:
            return
        self._check_consumed()
        if self._yielded != self._count:
            raise FieldObligationPendingError(f'{self._count - self._yielded} sequence elements were not read')


class CompoundReader:
    """ Iterating yields the name of each field, with the field's tag pending in the decoder.

    Each field must be read (or skipped) before the next one is yielded.
    """

    __slots__ = ('_decoder', '_name', '_done')

    def __init__(self, decoder: NBTDecoder) -> None:
        self._decoder = decoder
        self._name: Optional[str] = None
        self._done = False

    def __enter__(self) -> Self:
        return self

    def __iter__(self) -> Iterator[str]:
        deserializer = self._decoder.deserializer
        while not self._done:
            self._check_consumed()
            tag_byte = deserializer.read_byte()
            if tag_byte == END_BYTE:
                self._done = True
                return
            tag = Tag.from_byte(tag_byte)
            self._name = decode_mutf8_name(deserializer)
            self._decoder.context.set_tagged(tag)
            yield self._name

    def _check_consumed(self) -> None:
        if self._decoder.context.is_pending():
            raise FieldObligationPendingError(f'field {self._name!r} was not read')

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self._decoder._leave()
        if exc_type is not None:
            return
        self._check_consumed()
        if not self._done:
            raise FieldObligationPendingError('compound was not read until its end')
