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
"""Message source backed by ``messages_{locale}`` YAML or JSON bundles."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

_LOADERS: dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


class ResourceBundleMessageSource:
    """Looks message codes up in per-locale bundle files under *base_path*.

    Bundles may nest codes; ``{"errors": {"not_found": ...}}`` is addressed
    as ``errors.not_found``.  A code missing from ``pt-BR`` is searched in
    ``pt`` and finally in the default locale.
    """

    def __init__(self, base_path: str | Path, default_locale: str = "en") -> None:
        self._base_path = Path(base_path)
        self._default_locale = default_locale
        self._bundles: dict[str, dict[str, str]] = {}

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def get_message(self, code: str, args: tuple[Any, ...] = (), locale: str = "en") -> str:
        """Format *code* for *locale*; raises ``KeyError`` when no bundle in the chain has it."""
        for candidate in self._fallback_chain(locale):
            template = self._bundle(candidate).get(code)
            if template is not None:
                return _format(template, args)
        raise KeyError(f"No message found for code '{code}' in locale '{locale}'")

    def get_message_or_default(
        self,
        code: str,
        default: str,
        args: tuple[Any, ...] = (),
        locale: str = "en",
    ) -> str:
        try:
            return self.get_message(code, args, locale)
        except KeyError:
            return _format(default, args)

    def _fallback_chain(self, locale: str) -> list[str]:
        chain = [locale]
        language = locale.replace("_", "-").split("-")[0]
        for candidate in (language, self._default_locale):
            if candidate not in chain:
                chain.append(candidate)
        return chain

    def _bundle(self, locale: str) -> dict[str, str]:
        bundle = self._bundles.get(locale)
        if bundle is None:
            bundle = self._bundles[locale] = self._read_bundle(locale)
        return bundle

    def _read_bundle(self, locale: str) -> dict[str, str]:
        for suffix, load in _LOADERS.items():
            path = self._base_path / f"messages_{locale}{suffix}"
            if path.is_file():
                return dict(_flatten(load(path.read_text(encoding="utf-8")) or {}))
        return {}


def _flatten(data: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = []
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            items.extend(_flatten(value, path))
        else:
            items.append((path, str(value)))
    return items


def _format(template: str, args: tuple[Any, ...]) -> str:
    for index, arg in enumerate(args):
        template = template.replace(f"{{{index}}}", str(arg))
    return template
