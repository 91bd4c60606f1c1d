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
Annotations that choose a wire width (or another framing) for builtin values.

They are plain `NewType`s, so at runtime the values are the builtins themselves:

>>> U8(5) + 1
6
"""

from dataclasses import dataclass
from typing import NewType

I8 = NewType('I8', int)
U8 = NewType('U8', int)
I16 = NewType('I16', int)
U16 = NewType('U16', int)
I32 = NewType('I32', int)
U32 = NewType('U32', int)
I64 = NewType('I64', int)
U64 = NewType('U64', int)

# there's no tag for 128-bit integers, these exist so annotations using them fail when the schema is built
I128 = NewType('I128', int)
U128 = NewType('U128', int)

F32 = NewType('F32', float)
F64 = NewType('F64', float)

Char = NewType('Char', str)


@dataclass(frozen=True, slots=True)
class BlobSize:
    """ Use as `Annotated[bytes, BlobSize(n)]` to write exactly `n` raw bytes with no length on the wire.
    """
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError('blob size cannot be negative')
