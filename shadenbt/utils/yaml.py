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
from typing import Any, Union

import yaml

from shadenbt.exception import InvalidSettingsError


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Load a yaml file whose top level is a mapping, an empty file is an empty mapping.

    Anything that keeps the file from being used as settings (missing, unparseable, not a mapping) is reported as
    `InvalidSettingsError`.
    """
    path = Path(filepath)
    try:
        with path.open('r') as file:
            contents = yaml.safe_load(file)
    except OSError as e:
        raise InvalidSettingsError(f"'{path}' cannot be read") from e
    except yaml.YAMLError as e:
        raise InvalidSettingsError(f"'{path}' is not valid yaml") from e

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise InvalidSettingsError(f"'{path}' must contain a mapping, not {type(contents).__name__}")
    return contents
