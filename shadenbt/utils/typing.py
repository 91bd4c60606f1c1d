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

from types import UnionType
from typing import get_args as _typing_get_args, get_origin as _typing_get_origin


def get_origin(t: type | UnionType, /) -> type | None:
    """Same as typing.get_origin, but NewTypes resolve to the origin of their supertype.

    >>> from typing import NewType
    >>> get_origin(list[int])
    <class 'list'>
    >>> Ints = NewType('Ints', list[int])
    >>> get_origin(Ints)
    <class 'list'>
    >>> get_origin(int) is None
    True
    """
    return _typing_get_origin(_resolve_new_type(t))


def get_args(t: type | UnionType, /) -> tuple[type, ...]:
    """Same as typing.get_args, but NewTypes resolve to the args of their supertype."""
    return _typing_get_args(_resolve_new_type(t))


def _resolve_new_type(t: type | UnionType) -> type | UnionType:
    while (super_type := getattr(t, '__supertype__', None)) is not None:
        t = super_type
    return t


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    Normal behavior from `issubclass`:

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(bool, bytes | str)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> M = NewType('M', N)
    >>> is_subclass(M, int)
    True
    >>> is_subclass(M, str)
    False

    Unlike `issubclass`, anything that doesn't resolve to a class is simply not a subclass:

    >>> is_subclass(list[int], list)
    False
    """
    resolved = _resolve_new_type(cls)
    if not isinstance(resolved, type):
        return False
    return issubclass(resolved, class_or_tuple)
