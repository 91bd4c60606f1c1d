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


from pydantic import BaseModel as PydanticBaseModel, ConfigDict


class BaseModel(PydanticBaseModel):
    """Project base for configuration models.

    Models are immutable once loaded, unknown keys are rejected (a typo in a settings file must not pass silently) and
    values are not coerced across types, so `MAX_DEPTH: '64'` is an error rather than 64.

    Read: https://docs.pydantic.dev/latest/concepts/config/
    """

    model_config = ConfigDict(frozen=True, extra='forbid', strict=True)
