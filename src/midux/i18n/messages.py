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
"""Process-wide message formatter used for failure and log text."""

from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path
from typing import Any

from midux.i18n.adapters.resource_bundle import ResourceBundleMessageSource
from midux.i18n.ports.outbound import MessageSource

_logger = logging.getLogger(__name__)


def bundled_message_source(default_locale: str = "en") -> ResourceBundleMessageSource:
    """Message source reading the bundles shipped in ``midux.resources``."""
    base_path = Path(str(importlib.resources.files("midux.resources")))
    return ResourceBundleMessageSource(base_path=base_path, default_locale=default_locale)


class Messages:
    """Formats message keys with positional arguments.

    Unknown keys render as ``[key]``; :meth:`get` never raises.
    """

    _source: MessageSource | None = None
    _locale: str = "en"

    @classmethod
    def get(cls, key: str, *args: Any) -> str:
        try:
            return cls.source().get_message(key, args, cls._locale)
        except KeyError:
            return f"[{key}]"
        except Exception:
            _logger.warning("Message source failed to format %s", key, exc_info=True)
            return f"[{key}]"

    @classmethod
    def source(cls) -> MessageSource:
        if cls._source is None:
            cls._source = bundled_message_source()
        return cls._source

    @classmethod
    def locale(cls) -> str:
        return cls._locale

    @classmethod
    def configure(cls, source: MessageSource | None = None, locale: str | None = None) -> None:
        """Swap the message source and/or the active locale."""
        if source is not None:
            cls._source = source
        if locale is not None:
            cls._locale = locale

    @classmethod
    def reset(cls) -> None:
        """Restore the bundled source and the ``en`` locale."""
        cls._source = None
        cls._locale = "en"
