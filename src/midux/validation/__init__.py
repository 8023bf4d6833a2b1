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
"""MiduX validation: validators, results and the validation failure."""

from midux.validation.exceptions import RequestValidationException
from midux.validation.types import ValidationError, ValidationResult, ValidationSeverity
from midux.validation.validator import PydanticValidator, Validator

__all__ = [
    "PydanticValidator",
    "RequestValidationException",
    "ValidationError",
    "ValidationResult",
    "ValidationSeverity",
    "Validator",
]
