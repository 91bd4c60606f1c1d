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

from pathlib import Path
from typing import Optional, Union

from pydantic import Field, ValidationError

from shadenbt.exception import InvalidSettingsError
from shadenbt.utils import pydantic
from shadenbt.utils.yaml import dict_from_yaml


class ShadeNBTSettings(pydantic.BaseModel):
    # Maximum number of compounds and sequences that can be open at the same time, both when encoding and decoding.
    MAX_DEPTH: int = Field(default=512, gt=0)

    # Maximum number of bytes a single decode call may consume, `None` means unlimited.
    MAX_DECODE_BYTES: Optional[int] = Field(default=None, gt=0)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'ShadeNBTSettings':
        """Takes a filepath to a yaml file and returns a validated ShadeNBTSettings instance."""
        settings_dict = dict_from_yaml(filepath=filepath)
        try:
            return cls.model_validate(settings_dict)
        except ValidationError as e:
            raise InvalidSettingsError(f"invalid settings in '{filepath}'") from e
