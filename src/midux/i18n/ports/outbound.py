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
"""Outbound port used by :class:`~midux.i18n.Messages` to look up message templates."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MessageSource(Protocol):
    """Formats a message *code* for a *locale*.

    ``args`` fill the ``{0}``, ``{1}``, ... placeholders of the template.
    Implementations raise ``KeyError`` for unknown codes; the
    :class:`~midux.i18n.Messages` facade turns that into ``[code]``.
    """

    def get_message(self, code: str, args: tuple[Any, ...] = (), locale: str = "en") -> str: ...
