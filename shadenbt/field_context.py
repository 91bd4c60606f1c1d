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
The field context tracks what has to be written before the next value's payload.

A value never writes its own tag. Whoever hands a value to the encoder first sets an obligation (the value is the
root, a named field of a compound, or an element of a sequence), then the value discharges it with its tag right
before writing its payload. Discharging always consumes the obligation, so a value that is written without one is
caught as a bug instead of producing a corrupt document.

>>> se = Serializer.build_bytes_serializer()
>>> ctx = FieldContext()
>>> ctx.obligate_named('x')
>>> ctx.discharge(Tag.U8, se)
>>> bytes(se.finalize()).hex()
'01010078'
>>> ctx.discharge(Tag.U8, Serializer.build_bytes_serializer())
Traceback (most recent call last):
...
shadenbt.serialization.exceptions.FieldObligationUnsetError: value written without a pending obligation

Sequence elements share one frame, only the first element writes the element tag and the count:

>>> se = Serializer.build_bytes_serializer()
>>> frame = SequenceFrame(2)
>>> ctx.obligate_sequence(frame)
>>> ctx.discharge(Tag.U32, se)
>>> ctx.obligate_sequence(frame)
>>> ctx.discharge(Tag.U32, se)
>>> bytes(se.finalize()).hex()
'0302000000'
"""

from dataclasses import dataclass
from typing import Optional, Union

from typing_extensions import TypeAlias

from shadenbt.consts import SEQUENCE_COUNT_SIZE
from shadenbt.serialization import Serializer
from shadenbt.serialization.encoding.int import encode_int
from shadenbt.serialization.encoding.mutf8 import check_name_length, encode_mutf8_name, mutf8_encode
from shadenbt.serialization.exceptions import (
    FieldObligationUnsetError,
    TagMismatchError,
    UnsupportedValueKindError,
)
from shadenbt.tag import Tag


@dataclass(slots=True)
class SequenceFrame:
    """ Shared by all elements of one sequence.

    `element_count` is pending until the first element is written, after that it's `None` and `element_tag` holds
    the tag every other element must have.
    """
    element_count: Optional[int]
    element_tag: Optional[Tag] = None

    @property
    def is_framed(self) -> bool:
        return self.element_count is None


@dataclass(frozen=True, slots=True)
class Root:
    pass


@dataclass(frozen=True, slots=True)
class Named:
    name: str


@dataclass(frozen=True, slots=True)
class InSeq:
    frame: SequenceFrame


@dataclass(frozen=True, slots=True)
class Unset:
    pass


Obligation: TypeAlias = Union[Root, Named, InSeq, Unset]

ROOT = Root()
UNSET = Unset()


class FieldContext:
    """ Write side: at most one pending obligation, consumed by `discharge`.
    """

    __slots__ = ('_state',)

    _state: Obligation

    def __init__(self) -> None:
        self._state = UNSET

    @property
    def state(self) -> Obligation:
        return self._state

    def is_pending(self) -> bool:
        return not isinstance(self._state, Unset)

    def obligate_root(self) -> None:
        self._state = ROOT

    def obligate_named(self, name: str) -> None:
        self._state = Named(name)

    def obligate_sequence(self, frame: SequenceFrame) -> None:
        self._state = InSeq(frame)

    def discharge(self, tag: Tag, serializer: Serializer) -> None:
        """ Write what the pending obligation requires for a value with the given tag.

        Every check happens before the first byte is written, on failure nothing is written. The obligation is
        consumed in any case.
        """
        state, self._state = self._state, UNSET
        if isinstance(state, Root):
            return
        elif isinstance(state, Named):
            encoded_name = mutf8_encode(state.name)
            check_name_length(encoded_name)
            serializer.write_byte(tag)
            encode_mutf8_name(serializer, encoded_name)
        elif isinstance(state, InSeq):
            frame = state.frame
            if frame.element_count is None:
                if tag != frame.element_tag:
                    raise UnsupportedValueKindError(
                        f'heterogeneous sequence: element tagged {tag.name} after {_tag_name(frame.element_tag)}'
                    )
                return
            serializer.write_byte(tag)
            encode_int(serializer, frame.element_count, length=SEQUENCE_COUNT_SIZE, signed=True)
            frame.element_tag = tag
            frame.element_count = None
        else:
            raise FieldObligationUnsetError('value written without a pending obligation')


@dataclass(frozen=True, slots=True)
class Tagged:
    tag: Tag


ReadObligation: TypeAlias = Union[Root, Tagged, Unset]


class ReadContext:
    """ Read side: the tag the next value was announced with, consumed by `expect`.

    The root value is not announced by any tag, so at the root whatever the caller expects is accepted.
    """

    __slots__ = ('_state',)

    _state: ReadObligation

    def __init__(self) -> None:
        self._state = UNSET

    @property
    def state(self) -> ReadObligation:
        return self._state

    def is_pending(self) -> bool:
        return not isinstance(self._state, Unset)

    def set_root(self) -> None:
        self._state = ROOT

    def set_tagged(self, tag: Tag) -> None:
        self._state = Tagged(tag)

    def peek(self) -> Optional[Tag]:
        """ The pending tag, `None` at the root.
        """
        state = self._state
        if isinstance(state, Tagged):
            return state.tag
        elif isinstance(state, Root):
            return None
        else:
            raise FieldObligationUnsetError('value read without a pending obligation')

    def expect(self, tag: Tag) -> None:
        state, self._state = self._state, UNSET
        if isinstance(state, Root):
            return
        elif isinstance(state, Tagged):
            if state.tag != tag:
                raise TagMismatchError(f'expected {tag.name}, found {state.tag.name}')
        else:
            raise FieldObligationUnsetError('value read without a pending obligation')


def _tag_name(tag: Optional[Tag]) -> str:
    return tag.name if tag is not None else 'nothing'
