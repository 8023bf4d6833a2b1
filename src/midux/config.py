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
"""MiduX settings: YAML or TOML files overlaid by ``MIDUX_*`` environment variables.

A complete file::

    midux:
      locale: en
      pipeline:
        validation-enabled: true
        logging-enabled: true
      logging:
        level: INFO
        format: console

Every leaf can be overridden from the environment, e.g.
``MIDUX_PIPELINE_LOGGING_ENABLED=false`` or ``MIDUX_LOGGING_FORMAT=json``.
"""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PREFIX_ATTR = "__midux_config_prefix__"
_ENV_PREFIX = "MIDUX_"
_TRUTHY = frozenset({"true", "1", "yes", "on"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Declare the configuration section a properties dataclass binds to.

    Usage::

        @config_properties(prefix="midux.pipeline")
        @dataclass
        class PipelineProperties:
            logging_enabled: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Read-only view over nested settings with environment overrides.

    Lookup order for a dotted key: the matching ``MIDUX_*`` variable, then
    the loaded data, then the caller's default.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    @classmethod
    def from_file(cls, *paths: str | Path) -> Config:
        """Load and deep-merge *paths* in order; later files win and missing files are skipped."""
        merged: dict[str, Any] = {}
        for path in map(Path, paths):
            if path.is_file():
                merged = _merge(merged, _read(path))
        return cls(merged)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        env_value = os.environ.get(_env_name(key))
        if env_value is not None:
            return env_value
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = self.get(prefix)
        return dict(section) if isinstance(section, Mapping) else {}

    def bind(self, properties_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from its section.

        Field ``logging_enabled`` is read from ``logging-enabled`` or
        ``logging_enabled``; nested dataclass fields bind from their own
        sub-section and unset fields keep their defaults.
        """
        prefix = getattr(properties_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{properties_cls.__name__} is not decorated with @config_properties")
        return self._bind(properties_cls, prefix)

    def _bind(self, cls: type[T], prefix: str) -> T:
        hints = get_type_hints(cls)
        values: dict[str, Any] = {}
        for f in dataclasses.fields(cls):  # type: ignore[arg-type]
            expected = hints.get(f.name)
            dashed = f"{prefix}.{f.name.replace('_', '-')}"
            if isinstance(expected, type) and dataclasses.is_dataclass(expected):
                nested = dashed if self.get_section(dashed) else f"{prefix}.{f.name}"
                values[f.name] = self._bind(expected, nested)
                continue
            value = self.get(dashed)
            if value is None:
                value = self.get(f"{prefix}.{f.name}")
            if value is not None:
                values[f.name] = _coerce(value, expected)
        return cls(**values)


def _env_name(key: str) -> str:
    # midux.pipeline.logging-enabled -> MIDUX_PIPELINE_LOGGING_ENABLED
    return _ENV_PREFIX + key.removeprefix("midux.").upper().replace(".", "_").replace("-", "_")


def _coerce(value: Any, expected: Any) -> Any:
    if not isinstance(value, str) or expected is str:
        return value
    if expected is bool:
        return value.strip().lower() in _TRUTHY
    if expected in (int, float):
        return expected(value)
    return value


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ── MiduX properties ──────────────────────────────────────────


@dataclass
class PipelineProperties:
    """``midux.pipeline.*``: which default behaviors :func:`~midux.add_mediator` registers."""

    validation_enabled: bool = True
    logging_enabled: bool = True


@dataclass
class LoggingProperties:
    """``midux.logging.*``."""

    level: str = "INFO"
    format: str = "console"


@config_properties(prefix="midux")
@dataclass
class MediatorProperties:
    """Root MiduX configuration (``midux.*``)."""

    locale: str = "en"
    pipeline: PipelineProperties = field(default_factory=PipelineProperties)
    logging: LoggingProperties = field(default_factory=LoggingProperties)
