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
"""Logging pipeline behavior: records start, completion, failure and duration."""

from __future__ import annotations

import time
from typing import Any

import structlog

from midux.cancellation import CancellationToken
from midux.i18n import Messages
from midux.types import NextHandler, PipelineBehavior, TRequest, TResponse


class LoggingBehavior(PipelineBehavior[TRequest, TResponse]):
    """Logs request processing.  Never alters results or swallows failures."""

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)

    async def handle(
        self,
        request: TRequest,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> Any:
        request_name = type(request).__name__
        self._logger.info(Messages.get("Log_ProcessingStarted", request_name), request_type=request_name)
        start = time.perf_counter()

        try:
            response = await next_handler()
        except Exception as exc:
            elapsed_ms = _elapsed_ms(start)
            self._logger.error(
                Messages.get("Log_ProcessingError", request_name, elapsed_ms),
                request_type=request_name,
                elapsed_ms=elapsed_ms,
                exc_info=exc,
            )
            raise

        elapsed_ms = _elapsed_ms(start)
        self._logger.info(
            Messages.get("Log_ProcessingCompleted", request_name, elapsed_ms),
            request_type=request_name,
            elapsed_ms=elapsed_ms,
        )
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
