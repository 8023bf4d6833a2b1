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
"""Tests for StructlogAdapter configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from midux.config import Config, LoggingProperties
from midux.logging import LoggingPort, StructlogAdapter


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("midux.mediator").setLevel(logging.NOTSET)


class TestStructlogAdapter:
    def test_implements_port(self) -> None:
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_level_applied_to_root_logger(self) -> None:
        StructlogAdapter().configure(Config({"midux": {"logging": {"level": "debug"}}}))
        assert logging.getLogger().level == logging.DEBUG

    def test_json_format_renders_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        adapter = StructlogAdapter()
        adapter.configure(Config({"midux": {"logging": {"format": "json"}}}))

        adapter.get_logger("midux.test").info("Processing request Echo", request_type="Echo")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Processing request Echo"
        assert payload["request_type"] == "Echo"
        assert payload["level"] == "info"

    def test_set_level(self) -> None:
        StructlogAdapter().set_level("midux.mediator", "error")
        assert logging.getLogger("midux.mediator").level == logging.ERROR

    def test_apply_keeps_properties(self) -> None:
        adapter = StructlogAdapter()
        adapter.apply(LoggingProperties(level="warning", format="json"))

        assert adapter.properties.format == "json"
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        StructlogAdapter().apply(LoggingProperties(level="chatty"))
        assert logging.getLogger().level == logging.INFO
