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
"""Cooperative cancellation token threaded through handlers and behaviors.

The mediator never aborts in-flight work; handlers, behaviors and
notification subscribers check the token themselves.
"""

from __future__ import annotations

import asyncio


class CancellationToken:
    """A one-shot, shareable cancellation signal."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @classmethod
    def none(cls) -> CancellationToken:
        """A fresh token that nobody holds a reference to cancel."""
        return cls()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Signal cancellation.  Subsequent calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise :class:`asyncio.CancelledError` when cancellation was requested."""
        if self._event.is_set():
            raise asyncio.CancelledError(self._reason or "operation cancelled")

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()
