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
"""Message contracts and handler capabilities.

``Request`` and ``Notification`` are **not** dataclasses so that subclasses
can freely use ``@dataclass(frozen=True)``::

    @dataclass(frozen=True)
    class CreateUser(Request[UserId]):
        name: str

    class CreateUserHandler(RequestHandler[CreateUser, UserId]):
        async def handle(self, request: CreateUser, cancellation: CancellationToken) -> UserId:
            ...

The response type of a request is read from its ``Request[R]`` base; the
pair ``(CreateUser, UserId)`` is the handler key, and the parametrized
generic ``RequestHandler[CreateUser, UserId]`` is what the resolver is asked
for.
"""

from __future__ import annotations

import types
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeAlias, TypeVar, get_args, get_origin

from midux.cancellation import CancellationToken

R = TypeVar("R")
TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")
TNotification = TypeVar("TNotification")

NextHandler: TypeAlias = Callable[[], Awaitable[Any]]
"""Zero-argument continuation handed to each :class:`PipelineBehavior`."""

HandlerKey: TypeAlias = tuple[type, Any]


class Request(Generic[R]):
    """Marker base for requests expecting a response of type ``R``."""


class Notification:
    """Marker base for notifications broadcast to any number of subscribers."""


class RequestHandler(ABC, Generic[TRequest, TResponse]):
    """Performs the actual work for one (request type, response type) pair."""

    @abstractmethod
    async def handle(self, request: TRequest, cancellation: CancellationToken) -> TResponse: ...


class NotificationHandler(ABC, Generic[TNotification]):
    """Independent subscriber for one notification type."""

    @abstractmethod
    async def handle(self, notification: TNotification, cancellation: CancellationToken) -> None: ...


class PipelineBehavior(ABC, Generic[TRequest, TResponse]):
    """Middleware wrapping the handler call.

    Implementations decide whether and when to await ``next_handler``: they
    may short-circuit by never calling it, call it several times or
    transform its result.
    """

    @abstractmethod
    async def handle(
        self,
        request: TRequest,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> TResponse: ...


# ── generic introspection ─────────────────────────────────────


def generic_args(cls: type, origin: type) -> tuple[Any, ...] | None:
    """Return the type arguments ``cls`` supplies to the generic ``origin``.

    Walks the MRO so subclasses inherit the arguments declared by their
    parents.  Returns ``None`` when no parametrized ``origin`` base exists.
    """
    for klass in cls.__mro__:
        for base in types.get_original_bases(klass):
            base_origin = get_origin(base)
            if base_origin is None or not isinstance(base_origin, type):
                continue
            if issubclass(base_origin, origin):
                args = get_args(base)
                if args:
                    return args
    return None


def response_type_of(request_type: type) -> Any:
    """Response type declared by ``request_type`` through ``Request[R]``."""
    args = generic_args(request_type, Request)
    if not args or isinstance(args[0], TypeVar):
        return Any
    return args[0]


def handler_key(request_type: type) -> HandlerKey:
    return (request_type, response_type_of(request_type))
