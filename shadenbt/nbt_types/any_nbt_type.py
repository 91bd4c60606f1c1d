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

from __future__ import annotations

from dataclasses import is_dataclass
from enum import Enum
from typing import Any

from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.field_context import Root
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.serialization.encoding.int import check_int_range
from shadenbt.serialization.exceptions import UnsupportedValueKindError
from shadenbt.values import Float, SizedFloat, SizedInt


class AnyNBTType(NBTType[Any]):
    """ Represents values whose type is only known at runtime, `typing.Any`.

    The framing is picked from the value itself: `bool` as `U8`, `int` as a 64-bit integer, `float` as a 64-bit
    float, `bytes` as a sequence of `U8`, `list`/`tuple` as sequences, `dict` (with `str` keys) as compounds, the
    wrappers from `shadenbt.values` with their own width, and dataclasses, enums and NamedTuples with their schema.

    As the root of a document the value must be written as a compound (a `dict`, dataclass, enum or NamedTuple): the
    root has no tag, and without a schema it can only be read back as a compound.

    Decoding uses only the tags, so what comes back is built from `str`, `list`, `dict` and the wrappers:

    >>> any_type = AnyNBTType()
    >>> any_type.from_bytes(any_type.to_bytes({'a': [1, 2], 'b': 'x'}))
    {'a': [Long(1), Long(2)], 'b': 'x'}
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: NBTType.TypeMap) -> Self:
        if type_ is not Any:
            raise TypeError('expected typing.Any')
        return cls()

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        # XXX: the value is checked while it's being serialized, every branch of _serialize rejects what it can't take
        pass

    @override
    def _serialize(self, encoder: NBTEncoder, value: Any, /) -> None:
        if isinstance(encoder.context.state, Root) and not _is_compound(value):
            raise UnsupportedValueKindError(
                f'a {type(value).__name__} root cannot be read back without a schema, the root must be a compound'
            )
        if isinstance(value, bool):
            encoder.visit_bool(value)
        elif isinstance(value, SizedInt):
            encoder.visit_int(value, length=value.LENGTH, signed=True)
        elif isinstance(value, Enum) or (is_dataclass(value) and not isinstance(value, type)):
            self._schema_for(value).serialize(encoder, value)
        elif isinstance(value, int):
            check_int_range(value, length=8, signed=True)
            encoder.visit_i64(value)
        elif isinstance(value, SizedFloat):
            if isinstance(value, Float):
                encoder.visit_f32(value)
            else:
                encoder.visit_f64(value)
        elif isinstance(value, float):
            encoder.visit_f64(value)
        elif isinstance(value, str):
            encoder.visit_str(value)
        elif isinstance(value, (bytes, bytearray)):
            encoder.visit_byte_sequence(value)
        elif isinstance(value, tuple) and hasattr(value, '_fields'):
            self._schema_for(value).serialize(encoder, value)
        elif isinstance(value, (list, tuple)):
            with encoder.visit_sequence(len(value)) as sequence:
                for item in value:
                    sequence.element(item, self.serialize)
        elif isinstance(value, dict):
            with encoder.visit_compound() as compound:
                for k, v in value.items():
                    if not isinstance(k, str):
                        raise UnsupportedValueKindError(f'compound keys must be str, got {k!r}')
                    compound.field(k, v, self.serialize)
        elif value is None:
            raise UnsupportedValueKindError('None has no wire framing outside of an optional')
        else:
            raise UnsupportedValueKindError(f'values of type {type(value).__name__} have no wire framing')

    @staticmethod
    def _schema_for(value: Any) -> NBTType:
        from shadenbt.nbt_types import make_nbt_type
        return make_nbt_type(type(value))

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> Any:
        return decoder.read_any()


def _is_compound(value: Any) -> bool:
    """ Whether `_serialize` writes the value as a compound.
    """
    if isinstance(value, (dict, Enum)):
        return True
    if is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, tuple) and hasattr(value, '_fields')
