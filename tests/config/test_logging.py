"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from blogforge.config.logging import (
    LOGGER_NAME,
    bind_command,
    configure_logging,
    level_for,
)
from blogforge.config.settings import BlogForgeSettings


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    bf = logging.getLogger(LOGGER_NAME)
    bf_level = bf.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    bf.setLevel(bf_level)
    structlog.contextvars.clear_contextvars()


def _settings(**flags: bool) -> BlogForgeSettings:
    return BlogForgeSettings(**flags)


class TestLevels:
    @pytest.mark.parametrize(
        "flags,expected",
        [
            ({}, logging.WARNING),
            ({"verbose": True}, logging.DEBUG),
            ({"quiet": True}, logging.ERROR),
            ({"verbose": True, "quiet": True}, logging.DEBUG),
        ],
    )
    def test_level_for(self, flags: dict[str, bool], expected: int) -> None:
        assert level_for(_settings(**flags)) == expected

    def test_verbose_enables_debug(self) -> None:
        configure_logging(_settings(verbose=True))
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_quiet_hides_warnings(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(quiet=True, log_json=True))
        logging.getLogger("blogforge.config.loader").warning("Invalid configuration")
        assert capfd.readouterr().err == ""


class TestConfigureLogging:
    def test_human_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(verbose=True))
        structlog.get_logger("blogforge.test").warning("hello world", key="val")
        err = capfd.readouterr().err
        assert "hello world" in err
        assert "key" in err

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(verbose=True, log_json=True))
        log = structlog.get_logger("blogforge.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "blogforge.test"
        assert parsed["timestamp"].endswith("Z")

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(_settings(verbose=True, log_json=True))

        logging.getLogger("blogforge.config.loader").debug("Loaded configuration from x")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Loaded configuration from x"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "blogforge.config.loader"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(log_json=True))

        logging.getLogger("blogforge.domain.extractor").debug("Extracted 2 schemas")

        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(verbose=True, log_json=True))

        logging.getLogger("markdown_it").debug("parser noise")

        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(_settings(verbose=True))
        configure_logging(_settings(verbose=True, log_json=True))
        assert len(logging.getLogger().handlers) == 1


class TestCommandContext:
    def test_bound_command_in_records(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(log_json=True))
        bind_command("blogforge articles create")

        logging.getLogger("blogforge.services.content").warning("slug taken")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["command"] == "blogforge articles create"

    def test_reconfigure_clears_command(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(log_json=True))
        bind_command("blogforge doctor")
        configure_logging(_settings(log_json=True))

        logging.getLogger("blogforge.services.doctor").warning("fresh run")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert "command" not in parsed
