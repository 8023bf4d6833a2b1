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
"""MiduX: in-process mediator with a pluggable behavior pipeline.

Quick start::

    from dataclasses import dataclass

    from midux import (
        CancellationToken, Container, Mediator, Request, RequestHandler,
        add_mediator, register_handlers,
    )

    @dataclass(frozen=True)
    class CreateOrder(Request[str]):
        customer: str

    class CreateOrderHandler(RequestHandler[CreateOrder, str]):
        async def handle(self, request: CreateOrder, cancellation: CancellationToken) -> str:
            return f"order-{request.customer}"

    container = Container()
    add_mediator(container)
    register_handlers(container, CreateOrderHandler)

    async with container.create_scope() as scope:
        mediator = scope.resolve(Mediator)
        order_id = await mediator.send(CreateOrder(customer="alice"))
"""

from midux.cancellation import CancellationToken
from midux.config import Config, MediatorProperties
from midux.container import Container, Scope, ScopeFactory, ServiceResolver, ServiceScope
from midux.exceptions import (
    HandlerNotFoundException,
    HandlerRegistrationException,
    MediatorException,
    MiduxException,
)
from midux.i18n import Messages
from midux.mediator import DefaultMediator, Mediator
from midux.pipeline import LoggingBehavior, ValidationBehavior
from midux.registration import (
    add_mediator,
    add_notification_handler,
    add_pipeline_behavior,
    add_request_handler,
    add_validator,
    register_handlers,
)
from midux.types import (
    NextHandler,
    Notification,
    NotificationHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
)
from midux.validation import (
    PydanticValidator,
    RequestValidationException,
    ValidationError,
    ValidationResult,
    ValidationSeverity,
    Validator,
)

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "Config",
    "Container",
    "DefaultMediator",
    "HandlerNotFoundException",
    "HandlerRegistrationException",
    "LoggingBehavior",
    "Mediator",
    "MediatorException",
    "MediatorProperties",
    "Messages",
    "MiduxException",
    "NextHandler",
    "Notification",
    "NotificationHandler",
    "PipelineBehavior",
    "PydanticValidator",
    "Request",
    "RequestHandler",
    "RequestValidationException",
    "Scope",
    "ScopeFactory",
    "ServiceResolver",
    "ServiceScope",
    "ValidationBehavior",
    "ValidationError",
    "ValidationResult",
    "ValidationSeverity",
    "Validator",
    "add_mediator",
    "add_notification_handler",
    "add_pipeline_behavior",
    "add_request_handler",
    "add_validator",
    "register_handlers",
]
