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
"""Service registration metadata."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from midux.container.types import Scope


@dataclass
class Registration:
    """Metadata for a registered service.

    Exactly one of ``impl_type``, ``factory`` or ``instance`` provides the
    service.  ``open_generic`` registrations are keyed by a generic origin
    (e.g. ``PipelineBehavior``) and serve every closed key of that origin.
    """

    service: Any
    impl_type: type | None = None
    factory: Callable[..., Any] | None = None
    instance: Any = field(default=None, repr=False)
    scope: Scope = Scope.TRANSIENT
    open_generic: bool = False
    order: int = 0
    singletons: dict[tuple[Any, ...], Any] = field(default_factory=dict, repr=False)

    @property
    def provider_name(self) -> str:
        provider = self.impl_type or self.factory
        if provider is None:
            return type(self.instance).__name__
        return getattr(provider, "__qualname__", repr(provider))
