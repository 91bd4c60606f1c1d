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

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from shadenbt.conf.settings import ShadeNBTSettings as Settings
from shadenbt.exception import InvalidSettingsError

logger = get_logger()

SETTINGS_ENV_VAR = 'SHADENBT_CONFIG_YAML'

# Source name used when no yaml file is configured.
DEFAULT_SOURCE = '<defaults>'


class _SettingsMetadata(NamedTuple):
    source: str
    settings: Settings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> Settings:
    """
    Returns the settings, loading them on the first call.

    The settings come from the yaml filepath in the 'SHADENBT_CONFIG_YAML' env var, or are the defaults if it's not
    set. Once loaded they are reused, changing the env var to point to another file afterwards is an error.
    """
    settings_yaml_filepath = os.environ.get(SETTINGS_ENV_VAR)
    if settings_yaml_filepath is None:
        return _load_settings_singleton(DEFAULT_SOURCE)
    return _load_settings_singleton(settings_yaml_filepath)


def get_settings_source() -> str:
    """ Returns the path of the YAML file that was loaded, or DEFAULT_SOURCE.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def _load_settings_singleton(source: str) -> Settings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise InvalidSettingsError('loading settings twice with a different source')
        return _settings_singleton.settings

    settings = Settings() if source == DEFAULT_SOURCE else Settings.from_yaml(filepath=source)
    logger.debug('settings loaded', source=source, max_depth=settings.MAX_DEPTH)
    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings


def _reset_settings_singleton() -> None:
    """Forget the loaded settings, only meant for tests."""
    global _settings_singleton
    _settings_singleton = None
