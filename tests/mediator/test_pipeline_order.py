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
"""Tests for behavior chain composition inside Mediator.send."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from midux import (
    CancellationToken,
    Container,
    DefaultMediator,
    NextHandler,
    PipelineBehavior,
    Request,
    RequestHandler,
    add_pipeline_behavior,
    add_request_handler,
)


@dataclass(frozen=True)
class Echo(Request[str]):
    message: str


@dataclass(frozen=True)
class Other(Request[str]):
    message: str


execution_log: list[str] = []


class EchoHandler(RequestHandler[Echo, str]):
    async def handle(self, request: Echo, cancellation: CancellationToken) -> str:
        execution_log.append("handler")
        return request.message


class OtherHandler(RequestHandler[Other, str]):
    async def handle(self, request: Other, cancellation: CancellationToken) -> str:
        return request.message


class _Tracking(PipelineBehavior[Any, Any]):
    name = ""

    async def handle(self, request: Any, next_handler: NextHandler, cancellation: CancellationToken) -> Any:
        execution_log.append(f"{self.name}:before")
        result = await next_handler()
        execution_log.append(f"{self.name}:after")
        return f"{self.name}({result})"


class BehaviorA(_Tracking):
    name = "A"


class BehaviorB(_Tracking):
    name = "B"


class EchoOnlyBehavior(PipelineBehavior[Echo, str]):
    async def handle(self, request: Echo, next_handler: NextHandler, cancellation: CancellationToken) -> str:
        return (await next_handler()).upper()


class RejectBehavior(PipelineBehavior[Any, Any]):
    async def handle(self, request: Any, next_handler: NextHandler, cancellation: CancellationToken) -> Any:
        return "rejected"


class TwiceBehavior(PipelineBehavior[Any, Any]):
    async def handle(self, request: Any, next_handler: NextHandler, cancellation: CancellationToken) -> Any:
        first = await next_handler()
        second = await next_handler()
        return f"{first}+{second}"


class TokenCapturingBehavior(PipelineBehavior[Any, Any]):
    seen: list[CancellationToken] = []

    async def handle(self, request: Any, next_handler: NextHandler, cancellation: CancellationToken) -> Any:
        TokenCapturingBehavior.seen.append(cancellation)
        return await next_handler()


def _mediator(*behaviors: type) -> DefaultMediator:
    container = Container()
    add_request_handler(container, EchoHandler)
    add_request_handler(container, OtherHandler)
    for behavior in behaviors:
        container.register(PipelineBehavior, behavior)
    return DefaultMediator(container)


@pytest.fixture(autouse=True)
def _clear_log() -> None:
    execution_log.clear()


class TestBehaviorOrdering:
    @pytest.mark.asyncio
    async def test_no_behaviors_calls_handler_directly(self) -> None:
        result = await _mediator().send(Echo(message="hello"))
        assert result == "hello"
        assert execution_log == ["handler"]

    @pytest.mark.asyncio
    async def test_last_registered_behavior_is_outermost(self) -> None:
        result = await _mediator(BehaviorA, BehaviorB).send(Echo(message="x"))

        assert execution_log == ["B:before", "A:before", "handler", "A:after", "B:after"]
        # B sees A's result returned.
        assert result == "B(A(x))"

    @pytest.mark.asyncio
    async def test_closed_behavior_applies_only_to_its_pair(self) -> None:
        container = Container()
        add_request_handler(container, EchoHandler)
        add_request_handler(container, OtherHandler)
        add_pipeline_behavior(container, EchoOnlyBehavior)
        mediator = DefaultMediator(container)

        assert await mediator.send(Echo(message="loud")) == "LOUD"
        assert await mediator.send(Other(message="quiet")) == "quiet"

    @pytest.mark.asyncio
    async def test_open_and_closed_behaviors_keep_registration_order(self) -> None:
        container = Container()
        add_request_handler(container, EchoHandler)
        container.register(PipelineBehavior, BehaviorA)
        add_pipeline_behavior(container, EchoOnlyBehavior)
        container.register(PipelineBehavior, BehaviorB)

        result = await DefaultMediator(container).send(Echo(message="x"))

        assert result == "B(A(X))"


class TestBehaviorControl:
    @pytest.mark.asyncio
    async def test_behavior_can_short_circuit(self) -> None:
        result = await _mediator(RejectBehavior).send(Echo(message="x"))
        assert result == "rejected"
        assert execution_log == []

    @pytest.mark.asyncio
    async def test_behavior_can_call_continuation_twice(self) -> None:
        result = await _mediator(TwiceBehavior).send(Echo(message="x"))
        assert result == "x+x"
        assert execution_log == ["handler", "handler"]

    @pytest.mark.asyncio
    async def test_same_token_reaches_every_behavior(self) -> None:
        TokenCapturingBehavior.seen.clear()
        token = CancellationToken()

        await _mediator(TokenCapturingBehavior, TokenCapturingBehavior).send(Echo(message="x"), token)

        assert TokenCapturingBehavior.seen == [token, token]

    @pytest.mark.asyncio
    async def test_behaviors_are_fresh_per_call(self) -> None:
        instances: list[object] = []

        class CountingBehavior(PipelineBehavior[Any, Any]):
            async def handle(self, request: Any, next_handler: NextHandler, cancellation: CancellationToken) -> Any:
                instances.append(self)
                return await next_handler()

        mediator = _mediator(CountingBehavior)
        for _ in range(2):
            await mediator.send(Echo(message="x"))

        assert len(instances) == 2
        assert instances[0] is not instances[1]
