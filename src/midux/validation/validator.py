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
"""Request validators.

A :class:`Validator` is registered per request type
(``Validator[CreateUser]``) and run by
:class:`~midux.pipeline.validation_behavior.ValidationBehavior`.
"""

from __future__ import annotations

import dataclasses
import functools
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticError

from midux.cancellation import CancellationToken
from midux.validation.types import ValidationError, ValidationResult, ValidationSeverity

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """Validates instances of ``T``, reporting every failure found."""

    @abstractmethod
    async def validate(self, instance: T, cancellation: CancellationToken | None = None) -> ValidationResult: ...


class PydanticValidator(Validator[T]):
    """Structural validation driven by pydantic field constraints.

    Works on pydantic models and on plain dataclasses whose fields carry
    ``Annotated[..., Field(...)]`` constraints::

        @dataclass(frozen=True)
        class CreateUser(Request[int]):
            name: Annotated[str, Field(min_length=1)]

    Anything else validates successfully.
    """

    async def validate(self, instance: T, cancellation: CancellationToken | None = None) -> ValidationResult:
        if isinstance(instance, BaseModel):
            data: Any = instance.model_dump()
        elif dataclasses.is_dataclass(instance) and not isinstance(instance, type):
            data = dataclasses.asdict(instance)
        else:
            return ValidationResult.success()

        try:
            _adapter_for(type(instance)).validate_python(data)
        except PydanticError as exc:
            return ValidationResult.from_errors(
                [
                    ValidationError(
                        field_name=".".join(str(loc) for loc in e["loc"]),
                        message=e["msg"],
                        error_code=e["type"],
                        severity=ValidationSeverity.ERROR,
                        rejected_value=e.get("input"),
                    )
                    for e in exc.errors()
                ]
            )
        return ValidationResult.success()


@functools.cache
def _adapter_for(cls: type) -> TypeAdapter[Any]:
    return TypeAdapter(cls)
