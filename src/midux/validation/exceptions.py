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
"""Validation exceptions."""

from __future__ import annotations

from collections.abc import Iterable

from midux.exceptions import MiduxException
from midux.validation.types import ValidationError


class RequestValidationException(MiduxException):
    """Raised when one or more validators reject a request."""

    def __init__(
        self,
        errors: Iterable[ValidationError],
        message: str | None = None,
        request_type: type | None = None,
    ) -> None:
        self.errors: tuple[ValidationError, ...] = tuple(errors)
        self.request_type = request_type
        summary = message or "; ".join(e.message for e in self.errors) or "Validation failed"
        super().__init__(
            message=summary,
            code="VALIDATION_FAILED",
            context={"errors": [{"field": e.field_name, "message": e.message} for e in self.errors]},
        )
