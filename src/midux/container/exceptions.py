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
"""Container exceptions: errors raised while resolving services."""

from __future__ import annotations

from typing import Any

from midux.exceptions import MiduxException


def _type_name(service: Any) -> str:
    return getattr(service, "__name__", None) or repr(service)


class ServiceResolutionError(MiduxException):
    """Base class for failures while resolving a service from a scope."""

    def __init__(self, service: Any, reason: str, code: str = "SERVICE_RESOLUTION_ERROR") -> None:
        self.service = service
        self.reason = reason
        super().__init__(
            message=f"Failed to resolve '{_type_name(service)}': {reason}",
            code=code,
            context={"service": _type_name(service)},
        )


class NoSuchServiceError(ServiceResolutionError):
    """No registration matches the requested service key."""

    def __init__(self, service: Any, required_by: str | None = None) -> None:
        self.required_by = required_by
        reason = "no service is registered"
        if required_by:
            reason += f" (required by {required_by})"
        super().__init__(service, reason, code="NO_SUCH_SERVICE")


class NoUniqueServiceError(ServiceResolutionError):
    """Several registrations match a key that must resolve to exactly one."""

    def __init__(self, service: Any, candidates: list[str]) -> None:
        self.candidates = candidates
        super().__init__(
            service,
            f"expected a single registration but found {len(candidates)}: {candidates}",
            code="NO_UNIQUE_SERVICE",
        )


class CircularDependencyError(ServiceResolutionError):
    """Circular constructor dependency detected during resolution.

    ``chain`` holds the implementation types in resolution order.
    """

    def __init__(self, *, chain: list[type], current: type) -> None:
        self.chain = chain
        self.current = current
        path = " -> ".join([t.__name__ for t in chain] + [current.__name__])
        super().__init__(current, f"circular dependency: {path}", code="CIRCULAR_DEPENDENCY")
