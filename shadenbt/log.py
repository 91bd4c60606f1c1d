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
Optional logging setup for applications embedding ShadeNBT.

The library itself only calls `structlog.get_logger()`, nothing is configured on import. Applications that already
configure structlog don't need this module.

Events are emitted under the `shadenbt` stdlib logger hierarchy (`shadenbt.decoder`, `shadenbt.nbt_types.utils`, ...),
so `setup_logging` only attaches a handler there and leaves the root logger alone.
"""

import logging
from enum import IntEnum, auto
from typing import Any, Optional, TextIO

import structlog
from typing_extensions import assert_never

LOGGER_NAME = 'shadenbt'


class LoggingOutput(IntEnum):
    NULL = auto()
    PRETTY = auto()
    JSON = auto()


def _build_handler(logging_output: LoggingOutput, stream: Optional[TextIO]) -> logging.Handler:
    renderer: Any
    match logging_output:
        case LoggingOutput.NULL:
            return logging.NullHandler()
        case LoggingOutput.PRETTY:
            renderer = structlog.dev.ConsoleRenderer(colors=stream is None)
        case LoggingOutput.JSON:
            renderer = structlog.processors.JSONRenderer()
        case _:
            assert_never(logging_output)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
        ],
    ))
    return handler


def setup_logging(
    *,
    logging_output: LoggingOutput = LoggingOutput.PRETTY,
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """ Route structlog events of this package through stdlib `logging`, rendered for a console or as JSON lines.

    Debug events (header flags, skipped fields, replaced types) are only emitted when `debug=True`. Calling this again
    replaces the previous handler, `stream` defaults to stderr.
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    for old_handler in list(package_logger.handlers):
        package_logger.removeHandler(old_handler)
    package_logger.addHandler(_build_handler(logging_output, stream))
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
