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
"""Registration helpers wiring MiduX into a :class:`~midux.container.Container`.

Typical setup::

    container = Container()
    add_mediator(container)
    register_handlers(container, CreateUserHandler, UserCreatedMailer, CreateUserValidator)

    async with container.create_scope() as scope:
        mediator = scope.resolve(Mediator)
        user_id = await mediator.send(CreateUser(name="alice"))
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from midux.config import MediatorProperties
from midux.container import Container, Scope
from midux.exceptions import HandlerRegistrationException
from midux.i18n import Messages
from midux.mediator import DefaultMediator, Mediator
from midux.pipeline import LoggingBehavior, ValidationBehavior
from midux.types import NotificationHandler, PipelineBehavior, RequestHandler, generic_args
from midux.validation.validator import Validator

_logger = logging.getLogger(__name__)


def add_mediator(container: Container, properties: MediatorProperties | None = None) -> Container:
    """Register the mediator and the default pipeline behaviors.

    ``ValidationBehavior`` is registered before ``LoggingBehavior``, which
    makes logging the outermost wrapper and validation the innermost.
    """
    props = properties or MediatorProperties()
    if container.is_registered(Mediator):
        raise HandlerRegistrationException("A mediator is already registered", service=Mediator)

    container.register(Mediator, scope=Scope.SCOPED, factory=lambda _: DefaultMediator(container))
    if props.pipeline.validation_enabled:
        container.register(PipelineBehavior, ValidationBehavior)
    if props.pipeline.logging_enabled:
        container.register(PipelineBehavior, LoggingBehavior)

    Messages.configure(locale=props.locale)
    return container


def add_request_handler(
    container: Container,
    handler_cls: type[RequestHandler[Any, Any]],
    scope: Scope = Scope.TRANSIENT,
) -> Any:
    """Register the single handler for the pair declared by ``handler_cls``.

    Returns the handler key service (``RequestHandler[TRequest, TResponse]``).
    """
    service = _closed_service(handler_cls, RequestHandler)
    if container.is_registered(service):
        raise HandlerRegistrationException(
            f"A handler is already registered for {_describe(service)}; "
            f"refusing to register {handler_cls.__qualname__}",
            service=handler_cls,
        )
    container.register(service, handler_cls, scope=scope)
    return service


def add_notification_handler(
    container: Container,
    handler_cls: type[NotificationHandler[Any]],
    scope: Scope = Scope.TRANSIENT,
) -> Any:
    """Subscribe ``handler_cls`` to the notification type it declares."""
    service = _closed_service(handler_cls, NotificationHandler)
    container.register(service, handler_cls, scope=scope)
    return service


def add_pipeline_behavior(
    container: Container,
    behavior_cls: type[PipelineBehavior[Any, Any]],
    scope: Scope = Scope.TRANSIENT,
) -> Any:
    """Register a behavior for every pair (generic class) or for the pair it closes over."""
    return _register_open_or_closed(container, behavior_cls, PipelineBehavior, scope)


def add_validator(
    container: Container,
    validator_cls: type[Validator[Any]],
    scope: Scope = Scope.TRANSIENT,
) -> Any:
    """Register a validator for every request (generic class) or for the request it declares."""
    return _register_open_or_closed(container, validator_cls, Validator, scope)


def register_handlers(container: Container, *classes: type, scope: Scope = Scope.TRANSIENT) -> None:
    """Register each class with the helper matching its base class."""
    for cls in classes:
        if issubclass(cls, RequestHandler):
            add_request_handler(container, cls, scope)
        elif issubclass(cls, NotificationHandler):
            add_notification_handler(container, cls, scope)
        elif issubclass(cls, PipelineBehavior):
            add_pipeline_behavior(container, cls, scope)
        elif issubclass(cls, Validator):
            add_validator(container, cls, scope)
        else:
            raise HandlerRegistrationException(
                f"{cls.__qualname__} is not a handler, behavior or validator",
                service=cls,
            )
        _logger.debug("Registered %s", cls.__qualname__)


# ── internals ─────────────────────────────────────────────────


def _closed_service(cls: type, origin: type) -> Any:
    args = generic_args(cls, origin)
    if not args or any(isinstance(arg, TypeVar) for arg in args):
        raise HandlerRegistrationException(
            f"Cannot register {cls.__qualname__}: {origin.__name__} type arguments are unresolvable",
            service=cls,
        )
    return origin[args]  # type: ignore[index]


def _register_open_or_closed(container: Container, cls: type, origin: type, scope: Scope) -> Any:
    if getattr(cls, "__parameters__", ()):
        container.register(origin, cls, scope=scope)
        return origin
    service = _closed_service(cls, origin)
    container.register(service, cls, scope=scope)
    return service


def _describe(service: Any) -> str:
    return getattr(service, "__name__", None) or repr(service)
