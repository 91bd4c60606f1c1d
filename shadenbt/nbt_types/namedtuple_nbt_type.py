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

from typing import NamedTuple, TypeVar, get_type_hints

from typing_extensions import Self, override

from shadenbt.nbt_types.dataclass_nbt_type import RecordField, RecordNBTType
from shadenbt.nbt_types.nbt_type import NBTType

N = TypeVar('N', bound=tuple)


class NamedTupleNBTType(RecordNBTType[N]):
    """ Represents NamedTuple instances as a compound, like dataclasses, not as a sequence like plain tuples.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: NBTType.TypeMap) -> Self:
        if not isinstance(type_, type) or NamedTuple not in getattr(type_, '__orig_bases__', tuple()):
            raise TypeError('expected NamedTuple type')
        hints = get_type_hints(type_, include_extras=True)
        field_defaults = type_._field_defaults  # type: ignore[attr-defined]
        values: dict[str, RecordField] = {}
        for field_name in type_._fields:  # type: ignore[attr-defined]
            values[field_name] = RecordField.from_type(
                hints[field_name],
                has_default=field_name in field_defaults,
                default_is_none=field_name in field_defaults and field_defaults[field_name] is None,
                type_map=type_map,
            )
        return cls(values, type_)
