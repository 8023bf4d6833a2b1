# Copyright 2026 The MiduX Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""structlog-backed :class:`~midux.logging.port.LoggingPort`.

``midux.logging.format`` selects ``console`` (coloured key/value lines) or
``json`` (one JSON object per line, tracebacks rendered into the event).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from midux.config import Config, LoggingProperties, MediatorProperties

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


class StructlogAdapter:
    """Routes structlog events through the stdlib root logger."""

    def __init__(self) -> None:
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self, config: Config) -> None:
        self.apply(config.bind(MediatorProperties).logging)

    def apply(self, properties: LoggingProperties) -> None:
        """Install the structlog pipeline and root level described by *properties*."""
        self._properties = properties
        structlog.configure(
            processors=[*_SHARED_PROCESSORS, *_renderers(properties.format)],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level(properties.level),
            force=True,
        )

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))


def _renderers(fmt: str) -> list[structlog.types.Processor]:
    if fmt.lower() == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO
