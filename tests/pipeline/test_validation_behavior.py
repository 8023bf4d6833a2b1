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
"""Tests for ValidationBehavior."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import Field

from midux import (
    CancellationToken,
    Container,
    DefaultMediator,
    MediatorException,
    PydanticValidator,
    Request,
    RequestHandler,
    RequestValidationException,
    ValidationBehavior,
    ValidationResult,
    Validator,
    add_request_handler,
    add_validator,
)
from midux.container import Scope
from midux.types import PipelineBehavior
from midux.validation import ValidationError


@dataclass(frozen=True)
class RegisterUser(Request[str]):
    name: str
    email: str
    age: int


@dataclass(frozen=True)
class Signup(Request[str]):
    username: Annotated[str, Field(min_length=3)]
    age: Annotated[int, Field(ge=18)]


handled: list[object] = []


class RegisterUserHandler(RequestHandler[RegisterUser, str]):
    async def handle(self, request: RegisterUser, cancellation: CancellationToken) -> str:
        handled.append(request)
        return f"user:{request.name}"


class SignupHandler(RequestHandler[Signup, str]):
    async def handle(self, request: Signup, cancellation: CancellationToken) -> str:
        handled.append(request)
        return f"signup:{request.username}"


class NameAndEmailValidator(Validator[RegisterUser]):
    async def validate(self, instance: RegisterUser, cancellation: CancellationToken | None = None) -> ValidationResult:
        errors = []
        if not instance.name:
            errors.append(ValidationError("name", "Name is required"))
        if "@" not in instance.email:
            errors.append(ValidationError("email", "Email is invalid"))
        return ValidationResult.from_errors(errors)


class AgeValidator(Validator[RegisterUser]):
    async def validate(self, instance: RegisterUser, cancellation: CancellationToken | None = None) -> ValidationResult:
        if instance.age < 0:
            return ValidationResult.failure("age", "Age must be positive")
        return ValidationResult.success()


@pytest.fixture(autouse=True)
def _clear_handled() -> None:
    handled.clear()


def _mediator(*validators: type) -> DefaultMediator:
    container = Container()
    container.register(PipelineBehavior, ValidationBehavior)
    add_request_handler(container, RegisterUserHandler)
    add_request_handler(container, SignupHandler)
    for validator in validators:
        add_validator(container, validator)
    return DefaultMediator(container)


class TestValidationThroughMediator:
    @pytest.mark.asyncio
    async def test_all_failures_from_all_validators_are_reported(self) -> None:
        mediator = _mediator(NameAndEmailValidator, AgeValidator)

        with pytest.raises(MediatorException) as exc_info:
            await mediator.send(RegisterUser(name="", email="nope", age=-1))

        err = exc_info.value
        assert err.code == "VALIDATION_ERROR"
        assert isinstance(err.cause, RequestValidationException)
        assert [e.field_name for e in err.cause.errors] == ["name", "email", "age"]
        for text in ("Name is required", "Email is invalid", "Age must be positive"):
            assert text in err.message
        assert handled == []

    @pytest.mark.asyncio
    async def test_valid_request_reaches_handler(self) -> None:
        mediator = _mediator(NameAndEmailValidator, AgeValidator)
        result = await mediator.send(RegisterUser(name="ada", email="ada@example.com", age=36))
        assert result == "user:ada"

    @pytest.mark.asyncio
    async def test_no_validators_passes_through(self) -> None:
        result = await _mediator().send(RegisterUser(name="", email="", age=-5))
        assert result == "user:"
        assert len(handled) == 1

    @pytest.mark.asyncio
    async def test_validators_only_apply_to_their_request_type(self) -> None:
        result = await _mediator(NameAndEmailValidator).send(Signup(username="grace", age=40))
        assert result == "signup:grace"


class TestPydanticValidator:
    @pytest.mark.asyncio
    async def test_open_registration_validates_every_request(self) -> None:
        mediator = _mediator(PydanticValidator)

        with pytest.raises(MediatorException) as exc_info:
            await mediator.send(Signup(username="al", age=12))

        fields = [e.field_name for e in exc_info.value.cause.errors]
        assert fields == ["username", "age"]
        assert handled == []

    @pytest.mark.asyncio
    async def test_constraints_satisfied(self) -> None:
        result = await _mediator(PydanticValidator).send(Signup(username="alan", age=41))
        assert result == "signup:alan"

    @pytest.mark.asyncio
    async def test_non_dataclass_is_valid(self) -> None:
        result = await PydanticValidator().validate(object())
        assert result.valid


class TestValidationBehaviorUnit:
    @pytest.mark.asyncio
    async def test_returns_continuation_result_unchanged(self) -> None:
        behavior = ValidationBehavior([AgeValidator()])

        async def next_handler() -> str:
            return "done"

        result = await behavior.handle(
            RegisterUser(name="a", email="a@b", age=1), next_handler, CancellationToken.none()
        )
        assert result == "done"

    @pytest.mark.asyncio
    async def test_summary_message_names_request_type(self) -> None:
        behavior = ValidationBehavior([AgeValidator()])

        async def next_handler() -> str:
            raise AssertionError("continuation must not run")

        with pytest.raises(RequestValidationException) as exc_info:
            await behavior.handle(RegisterUser(name="a", email="a@b", age=-1), next_handler, CancellationToken.none())

        assert "RegisterUser" in exc_info.value.message
        assert exc_info.value.request_type is RegisterUser

    @pytest.mark.asyncio
    async def test_validators_run_concurrently(self) -> None:
        first_started = asyncio.Event()
        second_started = asyncio.Event()

        class First(Validator[RegisterUser]):
            async def validate(self, instance, cancellation=None):  # type: ignore[no-untyped-def]
                first_started.set()
                await second_started.wait()
                return ValidationResult.success()

        class Second(Validator[RegisterUser]):
            async def validate(self, instance, cancellation=None):  # type: ignore[no-untyped-def]
                second_started.set()
                await first_started.wait()
                return ValidationResult.success()

        behavior = ValidationBehavior([First(), Second()])

        async def next_handler() -> str:
            return "ok"

        result = await asyncio.wait_for(
            behavior.handle(RegisterUser(name="a", email="a@b", age=1), next_handler, CancellationToken.none()),
            timeout=1,
        )
        assert result == "ok"

    def test_container_closes_validator_list_over_request_type(self) -> None:
        container = Container()
        container.register(PipelineBehavior, ValidationBehavior, scope=Scope.TRANSIENT)
        add_validator(container, AgeValidator)

        scope = container.create_scope()
        (behavior,) = scope.resolve_all(PipelineBehavior[RegisterUser, str])
        (other,) = scope.resolve_all(PipelineBehavior[Signup, str])

        assert isinstance(behavior, ValidationBehavior)
        assert [type(v) for v in behavior._validators] == [AgeValidator]
        assert other._validators == []
