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
"""Lightweight DI container with per-call resolution scopes.

Services are keyed by type, by a parametrized generic such as
``RequestHandler[CreateUser, UserId]``, or by an unparametrized generic
origin such as ``PipelineBehavior``.  The last form is an *open generic*
registration: it serves every closed key of that origin, and the
implementation is closed over the key's type arguments when instantiated.
"""

from __future__ import annotations

import inspect
import itertools
import logging
import types
import typing
from collections.abc import Callable
from typing import Annotated, Any, Protocol, TypeVar, Union, get_args, get_origin, runtime_checkable

from midux.container.exceptions import (
    CircularDependencyError,
    NoSuchServiceError,
    NoUniqueServiceError,
    ServiceResolutionError,
)
from midux.container.registry import Registration
from midux.container.types import Scope

_logger = logging.getLogger(__name__)


@runtime_checkable
class ServiceResolver(Protocol):
    """Resolves service instances within one resolution scope."""

    def resolve_all(self, service: Any) -> list[Any]: ...

    def resolve(self, service: Any) -> Any: ...


@runtime_checkable
class ScopeFactory(Protocol):
    """Opens a fresh resolution scope per mediator call."""

    def create_scope(self) -> ServiceScope: ...


class Container:
    """Service registry and root of every :class:`ServiceScope`.

    Registration order is preserved per key, across open and closed
    generic registrations alike.
    """

    def __init__(self) -> None:
        self._registrations: dict[Any, list[Registration]] = {}
        self._sequence = itertools.count()

    # ── registration ───────────────────────────────────────────

    def register(
        self,
        service: Any,
        implementation: type | None = None,
        *,
        scope: Scope = Scope.TRANSIENT,
        factory: Callable[[ServiceResolver], Any] | None = None,
    ) -> Registration:
        """Register an implementation class or a factory for *service*.

        With neither given, *service* is its own implementation.  Factories
        receive the resolving scope.
        """
        if implementation is None and factory is None:
            if not isinstance(service, type):
                raise TypeError(f"An implementation or factory is required for {service!r}")
            implementation = service
        reg = Registration(
            service=service,
            impl_type=implementation,
            factory=factory,
            scope=scope,
            open_generic=_is_open_generic(service),
            order=next(self._sequence),
        )
        self._registrations.setdefault(service, []).append(reg)
        _logger.debug("Registered %s for %s (%s)", reg.provider_name, _name(service), scope.name)
        return reg

    def register_instance(self, service: Any, instance: Any) -> Registration:
        """Register a pre-built instance shared by every scope."""
        reg = Registration(
            service=service,
            instance=instance,
            scope=Scope.SINGLETON,
            order=next(self._sequence),
        )
        self._registrations.setdefault(service, []).append(reg)
        return reg

    # ── lookup ─────────────────────────────────────────────────

    def is_registered(self, service: Any) -> bool:
        """Whether *service* has at least one registration under its exact key."""
        return bool(self._registrations.get(service))

    def registrations(self, service: Any) -> list[Registration]:
        """Registrations serving *service*, closed and open, in registration order."""
        found = list(self._registrations.get(service, ()))
        origin = get_origin(service)
        if origin is not None:
            found.extend(reg for reg in self._registrations.get(origin, ()) if reg.open_generic)
        found.sort(key=lambda reg: reg.order)
        return found

    def create_scope(self) -> ServiceScope:
        return ServiceScope(self)


class ServiceScope:
    """One resolution scope, used as an async context manager.

    SCOPED services are created once per scope; SCOPED and TRANSIENT
    instances are owned by the scope and their ``aclose()``/``close()``
    hooks run when it exits, on success and failure alike.
    """

    def __init__(self, container: Container) -> None:
        self._container = container
        self._scoped: dict[tuple[int, tuple[Any, ...]], Any] = {}
        self._owned: list[Any] = []
        self._resolving: dict[type, None] = {}  # insertion-ordered, O(1) lookup
        self._closed = False

    async def __aenter__(self) -> ServiceScope:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ── ServiceResolver protocol ───────────────────────────────

    def resolve_all(self, service: Any) -> list[Any]:
        """Resolve every registration serving *service*; empty when none."""
        return [self._provide(reg, service) for reg in self._container.registrations(service)]

    def resolve(self, service: Any) -> Any:
        """Resolve exactly one instance of *service*."""
        regs = self._container.registrations(service)
        if not regs:
            raise NoSuchServiceError(service)
        if len(regs) > 1:
            raise NoUniqueServiceError(service, [reg.provider_name for reg in regs])
        return self._provide(regs[0], service)

    # ── teardown ───────────────────────────────────────────────

    async def aclose(self) -> None:
        """Release scope-owned instances in reverse creation order."""
        if self._closed:
            return
        self._closed = True
        owned, self._owned = self._owned, []
        self._scoped.clear()
        for instance in reversed(owned):
            hook = getattr(instance, "aclose", None) or getattr(instance, "close", None)
            if hook is None or not callable(hook):
                continue
            try:
                result = hook()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                _logger.warning("Failed to release %s", type(instance).__name__, exc_info=True)

    # ── internals ──────────────────────────────────────────────

    def _provide(self, reg: Registration, service: Any) -> Any:
        if reg.instance is not None:
            return reg.instance

        args = get_args(service) if reg.open_generic else ()

        if reg.scope == Scope.SINGLETON:
            if args not in reg.singletons:
                reg.singletons[args] = self._create(reg, args)
            return reg.singletons[args]

        if reg.scope == Scope.SCOPED:
            cache_key = (reg.order, args)
            if cache_key not in self._scoped:
                instance = self._create(reg, args)
                self._scoped[cache_key] = instance
                self._owned.append(instance)
            return self._scoped[cache_key]

        instance = self._create(reg, args)
        self._owned.append(instance)
        return instance

    def _create(self, reg: Registration, args: tuple[Any, ...]) -> Any:
        """Create an instance, resolving constructor dependencies from type hints."""
        if reg.factory is not None:
            return reg.factory(self)

        impl = reg.impl_type
        if impl is None:
            raise ServiceResolutionError(
                reg.service,
                "the registration provides no implementation, factory or instance",
            )
        if impl in self._resolving:
            raise CircularDependencyError(chain=list(self._resolving.keys()), current=impl)

        params = getattr(impl, "__parameters__", ()) if args else ()
        bindings = dict(zip(params, args))
        target: Any = impl[tuple(args[: len(params)])] if params else impl

        self._resolving[impl] = None
        try:
            init = impl.__init__  # type: ignore[misc]
            if init is object.__init__:
                return target()

            hints = typing.get_type_hints(init, include_extras=True)
            hints.pop("return", None)
            sig = inspect.signature(init)

            kwargs: dict[str, Any] = {}
            for param_name, param_type in hints.items():
                param = sig.parameters.get(param_name)
                if param is None:
                    continue
                has_default = param.default is not inspect.Parameter.empty
                param_type = _close(param_type, bindings)
                try:
                    kwargs[param_name] = self._resolve_param(param_type)
                except (NoSuchServiceError, NoUniqueServiceError):
                    if has_default:
                        continue
                    raise NoSuchServiceError(
                        param_type,
                        required_by=f"{impl.__qualname__}.__init__()",
                    ) from None

            return target(**kwargs)
        finally:
            self._resolving.pop(impl, None)

    def _resolve_param(self, param_type: Any) -> Any:
        """Resolve one constructor parameter, handling Annotated, Optional and list."""
        origin = get_origin(param_type)

        if origin is Annotated:
            return self._resolve_param(get_args(param_type)[0])

        if origin is Union or isinstance(param_type, types.UnionType):
            non_none = [a for a in get_args(param_type) if a is not type(None)]
            if len(non_none) == 1:
                try:
                    return self.resolve(non_none[0])
                except (NoSuchServiceError, NoUniqueServiceError):
                    return None

        if origin is list:
            args = get_args(param_type)
            if args:
                return self.resolve_all(args[0])

        return self.resolve(param_type)


def _is_open_generic(service: Any) -> bool:
    return isinstance(service, type) and bool(getattr(service, "__parameters__", ()))


def _close(hint: Any, bindings: dict[Any, Any]) -> Any:
    """Substitute bound type variables in *hint* (``list[Validator[T]]`` -> ``list[Validator[X]]``)."""
    if not bindings:
        return hint
    if isinstance(hint, TypeVar):
        return bindings.get(hint, hint)
    params = getattr(hint, "__parameters__", ())
    if not params:
        return hint
    return hint[tuple(bindings.get(p, p) for p in params)]


def _name(service: Any) -> str:
    return getattr(service, "__name__", None) or repr(service)
