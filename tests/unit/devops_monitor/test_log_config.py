"""Tests for structlog configuration."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from devops_monitor.config import LoggingConfig
from devops_monitor.log_config import configure_logging


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.mark.parametrize("fmt", ["json", "console"])
def test_configure_logging_sets_level_and_renderer(fmt: str) -> None:
    configure_logging(LoggingConfig(level="DEBUG", format=fmt))  # type: ignore[arg-type]

    assert logging.getLogger().level == logging.DEBUG
    processors = structlog.get_config()["processors"]
    if fmt == "console":
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    else:
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_json_logs_are_written_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(LoggingConfig(level="INFO", format="json"))

    structlog.get_logger("devops_monitor.test").info("health_check_completed", status="optimal")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert '"event": "health_check_completed"' in captured.err
    assert '"status": "optimal"' in captured.err
