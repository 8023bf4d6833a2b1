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
"""Exception hierarchy for MiduX.

Every error raised by the package inherits from :class:`MiduxException`,
which carries a machine-readable ``code`` and a ``context`` dict alongside
the human-readable message.

Callers of :meth:`~midux.mediator.Mediator.send` and
:meth:`~midux.mediator.Mediator.publish` only ever see
:class:`MediatorException`; the underlying failure is kept on ``cause``.
"""

from __future__ import annotations

from typing import Any


class MiduxException(Exception):
    """Base exception for all MiduX errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"VALIDATION_ERROR"``).
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict[str, Any] = context if context is not None else {}


class MediatorException(MiduxException):
    """The single failure type raised from the dispatcher boundary.

    ``cause`` is the original exception.  For notification publishing,
    ``errors`` holds every subscriber failure; otherwise it holds ``cause``
    alone.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        code: str | None = None,
        context: dict[str, Any] | None = None,
        errors: tuple[BaseException, ...] | None = None,
    ) -> None:
        self.cause = cause
        if errors is None:
            errors = (cause,) if cause is not None else ()
        self.errors = errors
        ctx = dict(context or {})
        if cause is not None:
            ctx.setdefault("cause", str(cause))
        super().__init__(message=message, code=code or "MEDIATOR_ERROR", context=ctx)


class HandlerNotFoundException(MiduxException):
    """No handler is registered for a (request type, response type) pair."""

    def __init__(self, request_type: type, response_type: Any, message: str | None = None) -> None:
        self.request_type = request_type
        self.response_type = response_type
        response_name = getattr(response_type, "__name__", repr(response_type))
        super().__init__(
            message=message or f"No handler registered for request: {request_type.__name__} -> {response_name}",
            code="HANDLER_NOT_FOUND",
            context={"request_type": request_type.__name__, "response_type": response_name},
        )


class HandlerRegistrationException(MiduxException):
    """Invalid handler or mediator registration detected at setup time."""

    def __init__(self, message: str, service: Any = None) -> None:
        self.service = service
        ctx: dict[str, Any] = {}
        if service is not None:
            ctx["service"] = getattr(service, "__name__", repr(service))
        super().__init__(message=message, code="HANDLER_REGISTRATION_ERROR", context=ctx)
