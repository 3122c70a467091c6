"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from combined_mcp_server.utils.logging import configure_logging, resolve_level


class TestResolveLevel:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("info", logging.INFO),
            ("DEBUG", logging.DEBUG),
            (" warning ", logging.WARNING),
            ("error", logging.ERROR),
            ("verbose", logging.INFO),
        ],
    )
    def test_names(self, name: str, expected: int) -> None:
        assert resolve_level(name) == expected


class TestConfigureLogging:
    def test_sets_root_level(self, restore_root_logger) -> None:
        configure_logging("warning", stream=io.StringIO())
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1

    def test_json_lines(self, restore_root_logger) -> None:
        stream = io.StringIO()
        configure_logging("info", json_logs=True, stream=stream)
        structlog.get_logger("tests.json").info("server.startup", port=3000)
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "server.startup"
        assert record["port"] == 3000
        assert record["level"] == "info"

    def test_below_level_is_dropped(self, restore_root_logger) -> None:
        stream = io.StringIO()
        configure_logging("error", json_logs=True, stream=stream)
        structlog.get_logger("tests.quiet").info("hidden")
        assert stream.getvalue() == ""
