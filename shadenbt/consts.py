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
Wire constants shared by the encoder and the decoder.
"""

# Magic (`AD 4E 42 54`, that is `\xadNBT`) followed by the format version.
HEADER_MAGIC = bytes([0xAD, 0x4E, 0x42, 0x54, 0x00, 0x04])

# The only flags value written so far. The decoder keeps whatever it reads without interpreting it.
HEADER_FLAGS = 0x80
HEADER_FLAGS_HIGH_BIT = 0x80

HEADER_SIZE = len(HEADER_MAGIC) + 1

TAG_SIZE = 1

# Terminates the fields of a compound, also used as the element tag of empty sequences.
END_BYTE = 0x00

SEQUENCE_COUNT_SIZE = 4
MAX_SEQUENCE_LENGTH = (1 << (SEQUENCE_COUNT_SIZE * 8 - 1)) - 1
