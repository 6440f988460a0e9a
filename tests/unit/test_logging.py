"""Unit tests for structlog configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from tunematch.utils.logging import configure_logging, configure_logging_from_config, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    aiosqlite_level = logging.getLogger("aiosqlite").level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("aiosqlite").setLevel(aiosqlite_level)


class TestConfigureLogging:
    def test_sets_root_level_and_single_handler(self) -> None:
        configure_logging(log_level="debug", app_env="development")
        configure_logging(log_level="debug", app_env="development")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_aiosqlite_is_held_at_warning(self) -> None:
        configure_logging(log_level="DEBUG", app_env="development")
        assert logging.getLogger("aiosqlite").level == logging.WARNING

    def test_quiet_loggers_follow_stricter_level(self) -> None:
        configure_logging(log_level="ERROR", app_env="development")
        assert logging.getLogger("aiosqlite").level == logging.ERROR

    def test_production_renders_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", app_env="production")
        structlog.get_logger().info("match_created", match_id="m1")

        out = capsys.readouterr().out
        assert '"event": "match_created"' in out
        assert '"match_id": "m1"' in out

    def test_below_level_events_are_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="WARNING", json_output=True)
        structlog.get_logger().info("like_created")
        assert capsys.readouterr().out == ""


class TestConfigureFromConfig:
    def test_reads_logging_section(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging_from_config(
            {"app": {"env": "development"}, "logging": {"level": "WARNING", "json": True}}
        )
        structlog.get_logger().warning("profile_fetch_retry", attempt=1)

        assert logging.getLogger().level == logging.WARNING
        assert '"event": "profile_fetch_retry"' in capsys.readouterr().out

    def test_missing_sections_use_defaults(self) -> None:
        configure_logging_from_config({})
        assert logging.getLogger().level == logging.INFO


def test_get_logger_configures_on_first_use() -> None:
    structlog.reset_defaults()
    assert get_logger("tunematch.test") is not None
    assert structlog.is_configured()
