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

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.nbt_types.utils import TypeAliasMap, TypeToNBTTypeMap, get_aliased_type, get_usable_origin_type
from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.exceptions import FieldObligationPendingError

T = TypeVar('T')


class NBTType(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it will be traversed by the
    encoder/decoder.

    Each instance knows which `visit_*`/`read_*` calls a value of the modeled type turns into, so the same instance is
    used in both directions. Compound types hold the `NBTType` of their members.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        nbt_types_map: TypeToNBTTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> NBTType[T]:
        """ Instantiate a NBTType instance from a type signature using the given maps.

        A `nbt_types_map` associates concrete types to concrete NBTType classes, while an `alias_map` associates
        types with substitute types to use instead.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        nbt_type = type_map.nbt_types_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return nbt_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a NBTType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `NBTType.from_type`, forwarding the given `type_map`, for the types of its members.
        """
        # XXX: a NBTType that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a NBTType.TypeMap')

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a SerializationTypeError if the value's type is not compatible, or a SerializationValueError if its
        content is not.

        With `deep=True` (which is what this method uses) the check recurses into members of compound values.
        """
        # XXX: subclasses must implement NBTType._check_value, not NBTType.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, encoder: NBTEncoder, value: T, /) -> None:
        """ Hand a value to the encoder according to the signature that was abstracted.

        The value is shallowly checked first, members of compound values are checked as they are reached, so calling
        check_value before calling serialize is not needed.
        """
        # XXX: subclasses must implement NBTType._serialize, not NBTType.serialize
        self._check_value(value, deep=False)
        self._serialize(encoder, value)

    @final
    def deserialize(self, decoder: NBTDecoder, /) -> T:
        """ Rebuild a value from the decoder according to the signature that was abstracted.
        """
        # XXX: subclasses must implement NBTType._deserialize, not NBTType.deserialize
        value = self._deserialize(decoder)
        self._check_value(value, deep=False)
        return value

    @final
    def write_document(self, encoder: NBTEncoder, value: T, /) -> None:
        """ Write the header and `value` as the root value.
        """
        encoder.write_header()
        encoder.obligate_root()
        self.serialize(encoder, value)
        if encoder.context.is_pending():
            raise FieldObligationPendingError('nothing was written for the root value')

    @final
    def read_document(self, decoder: NBTDecoder, /) -> T:
        """ Read the header and the root value.
        """
        decoder.read_header()
        decoder.begin_root()
        value = self.deserialize(decoder)
        if decoder.context.is_pending():
            raise FieldObligationPendingError('the root value was not read')
        return value

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to a complete document.
        """
        serializer = Serializer.build_bytes_serializer()
        self.write_document(NBTEncoder(serializer), value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> T:
        """ Shortcut to quickly parse a value T from a complete document, trailing bytes are an error.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.read_document(NBTDecoder(deserializer))
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `NBTType.check_value`.

        Compound values should use `NBTType._check_value` on the inner type(s) instead of `NBTType.check_value` and
        pass the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, encoder: NBTEncoder, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        Members of compound values should be handed to the encoder with `NBTType.serialize` (not `_serialize`), so
        they are checked when they are reached.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, decoder: NBTDecoder, /) -> T:
        """ Inner implementation of `deserialize`.
        """
        raise NotImplementedError
