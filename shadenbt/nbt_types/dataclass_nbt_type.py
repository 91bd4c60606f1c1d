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
Records, that is dataclasses and NamedTuples, are written as compounds with one field per record field, in the
order the fields are declared.

A field annotated as optional (`T | None`) whose default is `None`, or that has no default, is written without the
optional wrapper: when its value is `None` the field is simply left out. An optional field with any other default
keeps the wrapper, `{}` for `None`. When reading, fields that
are missing get their default, or `None` if they are optional, and fields that are not in the record are skipped.

Skipping needs the tag to be enough to find the end of the value, so an unknown `BLOB` field can't be skipped and
fails the read with `UnsupportedValueKindError`.
"""

from __future__ import annotations

from dataclasses import MISSING, fields, is_dataclass
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, TypeVar, get_type_hints

from structlog import get_logger
from typing_extensions import Self, override

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.nbt_type import NBTType
from shadenbt.nbt_types.optional_nbt_type import OptionalNBTType
from shadenbt.serialization.exceptions import BadDataError, SerializationTypeError

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

logger = get_logger()

R = TypeVar('R')
D = TypeVar('D', bound='DataclassInstance')


class RecordField(NamedTuple):
    nbt_type: NBTType
    # `None` is written by leaving the field out
    omit_none: bool
    has_default: bool

    @classmethod
    def from_type(
        cls,
        type_: Any,
        /,
        *,
        has_default: bool,
        default_is_none: bool,
        type_map: NBTType.TypeMap,
    ) -> RecordField:
        nbt_type = NBTType.from_type(type_, type_map=type_map)
        if isinstance(nbt_type, OptionalNBTType) and (default_is_none or not has_default):
            return cls(nbt_type.inner, omit_none=True, has_default=has_default)
        return cls(nbt_type, omit_none=False, has_default=has_default)


class RecordNBTType(NBTType[R], Generic[R]):
    """ Base for record-like classes whose instances are built by passing each field as a keyword argument.
    """

    __slots__ = ('_fields', '_class')

    _fields: dict[str, RecordField]
    _class: type[R]

    def __init__(self, fields_: dict[str, RecordField], class_: type[R]) -> None:
        self._fields = fields_
        self._class = class_

    @override
    def _check_value(self, value: R, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise SerializationTypeError(f'expected {self._class.__name__} instance')
        if deep:
            for field_name, field in self._fields.items():
                field_value = getattr(value, field_name)
                if field_value is None and field.omit_none:
                    continue
                field.nbt_type._check_value(field_value, deep=True)

    @override
    def _serialize(self, encoder: NBTEncoder, value: R, /) -> None:
        with encoder.visit_compound() as compound:
            for field_name, field in self._fields.items():
                field_value = getattr(value, field_name)
                if field_value is None and field.omit_none:
                    continue
                compound.field(field_name, field_value, field.nbt_type.serialize)

    @override
    def _deserialize(self, decoder: NBTDecoder, /) -> R:
        kwargs: dict[str, Any] = {}
        with decoder.read_compound() as names:
            for name in names:
                field = self._fields.get(name)
                if field is None:
                    logger.debug('unknown field skipped', record=self._class.__name__, field=name)
                    decoder.skip()
                    continue
                if name in kwargs:
                    raise BadDataError(f'{self._class.__name__} field {name!r} appears twice')
                kwargs[name] = field.nbt_type.deserialize(decoder)
        for field_name, field in self._fields.items():
            if field_name in kwargs or field.has_default:
                continue
            if field.omit_none:
                kwargs[field_name] = None
            else:
                raise BadDataError(f'{self._class.__name__} is missing field {field_name!r}')
        return self._class(**kwargs)


class DataclassNBTType(RecordNBTType[D]):
    """ Represents dataclass instances, only fields that are part of `__init__` are written.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: NBTType.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        hints = get_type_hints(type_, include_extras=True)
        # XXX: the order is important, but `dict` and `fields` should have a stable order
        values: dict[str, RecordField] = {}
        for field in fields(type_):
            if not field.init:
                continue
            has_default = field.default is not MISSING or field.default_factory is not MISSING
            values[field.name] = RecordField.from_type(
                hints[field.name],
                has_default=has_default,
                default_is_none=field.default is None,
                type_map=type_map,
            )
        return cls(values, type_)
