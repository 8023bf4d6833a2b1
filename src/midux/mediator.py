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
"""Mediator: routes requests through the behavior pipeline to their handler
and fans notifications out to every subscriber.

Each :meth:`DefaultMediator.send` call:

1. opens a fresh resolution scope,
2. resolves the single ``RequestHandler[TRequest, TResponse]`` through a
   factory cached per handler key,
3. resolves every ``PipelineBehavior[TRequest, TResponse]`` in registration
   order and nests them so the last registered is outermost,
4. runs the chain once and translates any failure into a
   :class:`~midux.exceptions.MediatorException`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from midux.cancellation import CancellationToken
from midux.container import ScopeFactory, ServiceResolver
from midux.exceptions import HandlerNotFoundException, MediatorException
from midux.i18n import Messages
from midux.types import (
    HandlerKey,
    NextHandler,
    Notification,
    NotificationHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
    handler_key,
)
from midux.validation.exceptions import RequestValidationException

R = TypeVar("R")

HandlerFactory = Callable[[ServiceResolver], RequestHandler[Any, Any]]

# Process-wide; entries are inserted once per key and never removed.
_handler_factories: dict[HandlerKey, HandlerFactory] = {}


@runtime_checkable
class Mediator(Protocol):
    """Port for dispatching requests and publishing notifications."""

    async def send(self, request: Request[R], cancellation: CancellationToken | None = None) -> R: ...

    async def publish(self, notification: Notification, cancellation: CancellationToken | None = None) -> None: ...


class DefaultMediator:
    """Default :class:`Mediator` backed by a scope factory (usually a
    :class:`~midux.container.Container`)."""

    def __init__(self, provider: ScopeFactory) -> None:
        self._provider = provider

    # ── Mediator protocol ──────────────────────────────────────

    async def send(self, request: Request[R], cancellation: CancellationToken | None = None) -> R:
        token = cancellation or CancellationToken.none()
        request_name = type(request).__name__
        try:
            async with self._provider.create_scope() as scope:
                key = handler_key(type(request))
                handler = get_handler_factory(key)(scope)
                request_type, response_type = key
                behaviors: list[PipelineBehavior[Any, Any]] = scope.resolve_all(
                    PipelineBehavior[request_type, response_type]  # type: ignore[valid-type]
                )

                async def invoke_handler() -> Any:
                    return await handler.handle(request, token)

                chain: NextHandler = invoke_handler
                # Wrapped in registration order, so the last registered ends up outermost.
                for behavior in behaviors:
                    chain = _wrap(behavior, request, chain, token)

                return await chain()
        except RequestValidationException as exc:
            raise MediatorException(
                Messages.get("Error_Validation", request_name, exc.message),
                cause=exc,
                code="VALIDATION_ERROR",
                context={"request_type": request_name},
            ) from exc
        except Exception as exc:
            raise MediatorException(
                Messages.get("Error_ProcessingRequest", request_name, _describe(exc)),
                cause=exc,
                code="REQUEST_PROCESSING_ERROR",
                context={"request_type": request_name},
            ) from exc

    async def publish(self, notification: Notification, cancellation: CancellationToken | None = None) -> None:
        token = cancellation or CancellationToken.none()
        notification_name = type(notification).__name__
        try:
            async with self._provider.create_scope() as scope:
                handlers: list[NotificationHandler[Any]] = scope.resolve_all(
                    NotificationHandler[type(notification)]  # type: ignore[misc]
                )
                if not handlers:
                    return
                results = await asyncio.gather(
                    *(handler.handle(notification, token) for handler in handlers),
                    return_exceptions=True,
                )
        except Exception as exc:
            raise MediatorException(
                Messages.get("Error_PublishNotification", notification_name, _describe(exc)),
                cause=exc,
                code="NOTIFICATION_PUBLISH_ERROR",
                context={"notification_type": notification_name},
            ) from exc

        for result in results:
            if isinstance(result, asyncio.CancelledError):
                raise result

        errors = tuple(r for r in results if isinstance(r, Exception))
        if errors:
            first = errors[0]
            raise MediatorException(
                Messages.get("Error_PublishNotification", notification_name, _describe(first)),
                cause=first,
                code="NOTIFICATION_PUBLISH_ERROR",
                context={"notification_type": notification_name, "failed_handlers": len(errors)},
                errors=errors,
            ) from first


# ── handler factory cache ─────────────────────────────────────


def get_handler_factory(key: HandlerKey) -> HandlerFactory:
    """Return the cached resolution function for *key*, building it on first use."""
    factory = _handler_factories.get(key)
    if factory is None:
        factory = _handler_factories.setdefault(key, build_handler_factory(key))
    return factory


def build_handler_factory(key: HandlerKey) -> HandlerFactory:
    """Create the function resolving the single handler for *key* from a scope."""
    request_type, response_type = key
    service = RequestHandler[request_type, response_type]  # type: ignore[valid-type]

    def factory(resolver: ServiceResolver) -> RequestHandler[Any, Any]:
        handlers = resolver.resolve_all(service)
        if not handlers:
            raise HandlerNotFoundException(
                request_type,
                response_type,
                message=Messages.get(
                    "Error_HandlerNotFound",
                    request_type.__name__,
                    getattr(response_type, "__name__", repr(response_type)),
                ),
            )
        # Registration rejects duplicates; the latest registration wins otherwise.
        return handlers[-1]

    return factory


def _wrap(
    behavior: PipelineBehavior[Any, Any],
    request: Any,
    next_handler: NextHandler,
    cancellation: CancellationToken,
) -> Callable[[], Awaitable[Any]]:
    """Create a closure that calls ``behavior.handle`` with the next link."""

    async def _next() -> Any:
        return await behavior.handle(request, next_handler, cancellation)

    return _next


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
