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
"""Validation pipeline behavior: rejects invalid requests before the handler runs."""

from __future__ import annotations

import asyncio
from typing import Any

from midux.cancellation import CancellationToken
from midux.i18n import Messages
from midux.types import NextHandler, PipelineBehavior, TRequest, TResponse
from midux.validation.exceptions import RequestValidationException
from midux.validation.types import ValidationResult
from midux.validation.validator import Validator


class ValidationBehavior(PipelineBehavior[TRequest, TResponse]):
    """Runs every ``Validator[TRequest]`` concurrently.

    All failures from all validators are collected (validator order, then
    each validator's own order).  Any failure raises
    :class:`RequestValidationException` without invoking the continuation.
    """

    def __init__(self, validators: list[Validator[TRequest]]) -> None:
        self._validators = list(validators)

    async def handle(
        self,
        request: TRequest,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> Any:
        if not self._validators:
            return await next_handler()

        results = await asyncio.gather(*(v.validate(request, cancellation) for v in self._validators))
        errors = ValidationResult.merge(results).errors

        if errors:
            request_name = type(request).__name__
            message = Messages.get(
                "Validation_ErrorMessage",
                request_name,
                "; ".join(error.message for error in errors),
            )
            raise RequestValidationException(errors, message=message, request_type=type(request))

        return await next_handler()
