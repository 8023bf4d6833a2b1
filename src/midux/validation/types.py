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
"""Field-level validation failures and the result a validator returns."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ValidationSeverity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class ValidationError:
    """One rejected field: its name, a readable message and the offending value."""

    field_name: str
    message: str
    error_code: str = "VALIDATION_ERROR"
    severity: ValidationSeverity = ValidationSeverity.ERROR
    rejected_value: object = None

    def __str__(self) -> str:
        return f"{self.field_name}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validator run.  Valid exactly when it carries no errors."""

    errors: tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, field_name: str, message: str, *, error_code: str = "VALIDATION_ERROR") -> ValidationResult:
        return cls((ValidationError(field_name, message, error_code=error_code),))

    @classmethod
    def from_errors(cls, errors: Iterable[ValidationError]) -> ValidationResult:
        return cls(tuple(errors))

    @classmethod
    def merge(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        """Concatenate the errors of *results*, preserving their order."""
        return cls(tuple(error for result in results for error in result.errors))

    def combine(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult.merge((self, other))

    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]
